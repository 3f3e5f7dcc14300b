"""Freshkeep: kitchen ingredient freshness tracking."""
