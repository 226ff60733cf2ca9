"""Cross-platform fantasy player identity resolution and exposure analytics."""

__version__ = "0.1.0"
