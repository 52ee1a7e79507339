"""Outward-facing adapters."""
