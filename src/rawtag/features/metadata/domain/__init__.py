"""Metadata domain tables."""
