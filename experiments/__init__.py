"""Experiment harness: scenario sweeps over teller counts."""
