"""Scan score aggregation."""
