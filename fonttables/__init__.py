"""Readers and writers for OpenType font tables and variation data."""

__version__ = "0.1.0"