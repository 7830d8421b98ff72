"""Helpers that build container fixtures in memory."""
