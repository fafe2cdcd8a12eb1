"""Record synchronization for journal/diary applications."""

__version__ = "0.1.0"
