"""Metadata use cases: decoding helpers and container readers."""
