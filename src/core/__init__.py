"""Room image storage: signed-token codec, storage providers and shared utilities."""

__version__ = "1.0.0"
