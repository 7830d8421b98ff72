"""Application services wiring configuration, detection and readers."""
