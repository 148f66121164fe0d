"""Domain layer: patient aggregates, cache eligibility and reconciliation."""
