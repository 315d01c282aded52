"""Endurance season engine: activity reconciliation, training metrics and season planning."""
