"""Core navigation model."""
