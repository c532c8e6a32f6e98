"""Core application infrastructure: configuration, logging, errors, middleware and metrics."""
