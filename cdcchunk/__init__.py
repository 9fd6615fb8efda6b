"""Content-defined chunking algorithms, rolling hashes and small helpers for deduplication."""

__version__ = "0.1.0"