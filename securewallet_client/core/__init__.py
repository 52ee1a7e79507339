"""Configuration, token inspection and dependency wiring."""
