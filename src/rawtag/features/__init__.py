"""Feature packages: format detection and metadata extraction."""
