"""Meilies - request decoding for a RESP-speaking event stream server."""

__version__ = "0.1.0"
