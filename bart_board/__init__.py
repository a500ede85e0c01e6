"""Terminal departure board for BART stations."""

__version__ = "0.1.0"
