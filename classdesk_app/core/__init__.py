"""Core infrastructure: configuration, extensions, bootstrap and errors."""
