"""Core types and numeric helpers for data-digest."""
