"""Configuration loading and filesystem location policy."""
