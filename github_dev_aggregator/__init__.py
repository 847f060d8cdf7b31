"""Aggregate, enrich and cache GitHub developer data for a client UI."""
