"""Client for a bare-metal cloud API and its instance metadata service."""

__version__ = "0.1.0"