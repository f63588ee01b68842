"""Inkwell: blogging and social graph API."""

__version__ = "0.1.0"
