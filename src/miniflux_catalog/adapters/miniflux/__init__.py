"""Miniflux API adapter."""

from miniflux_catalog.adapters.miniflux.client import MinifluxClient

__all__ = ["MinifluxClient"]
