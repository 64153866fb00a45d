"""Keep a mutable "latest" API collection in sync with a versioned snapshot archive."""

__version__ = "0.1.0"
