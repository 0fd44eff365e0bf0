"""Core utilities: errors, configuration and logging."""
