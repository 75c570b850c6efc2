"""Catalog file reading and validation."""
