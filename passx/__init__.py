"""PassX: password management for an existing user base."""

__version__ = "1.0.0"
