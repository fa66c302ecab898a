"""Shared helpers (HTTP, logging) used across the resolver components."""
