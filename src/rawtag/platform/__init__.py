"""Infrastructure shared across features: binary access and logging."""
