"""Security policy construction and resolution."""
