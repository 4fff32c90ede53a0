"""Chat composer state: sent-message history with drafts and auto-capitalization."""
__version__ = "0.1.0"
