"""Bundled JSON schemas for stylegate."""
