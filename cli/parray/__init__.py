"""Command line interface for the persistent trie array."""

from .main import app, main

__all__ = ["app", "main"]
