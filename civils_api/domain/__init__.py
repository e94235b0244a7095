"""Domain layer: security policy model and domain errors."""
