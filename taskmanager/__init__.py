"""Task Manager: a to-do API with bearer auth and a client sync layer."""

__version__ = "1.0.0"
