"""Read-only browsing, search and name resolution for a Miniflux catalog."""

__version__ = "1.0.0"
