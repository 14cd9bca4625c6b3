"""Leader election and connectivity checking by message-driven graph nodes."""

__version__ = '0.1.0'
