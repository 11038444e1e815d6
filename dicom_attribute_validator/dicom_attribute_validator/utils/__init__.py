"""Shared helpers: logging setup and rule document format versions."""
