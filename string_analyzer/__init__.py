"""String Analyzer Service - analyze, store and filter text strings."""

__version__ = "1.0.0"
