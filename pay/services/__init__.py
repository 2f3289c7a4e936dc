"""Persistence helpers for billable owners."""
