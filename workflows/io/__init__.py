"""Configuration access."""
