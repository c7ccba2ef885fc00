"""Sync official-image repositories into a peribolos organization config."""

__version__ = "0.1.0"
