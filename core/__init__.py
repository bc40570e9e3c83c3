"""Core configuration, logging and datetime utilities."""
