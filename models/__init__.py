"""View models for paginated listings."""
