"""Parsing, key extraction and signature checking."""
