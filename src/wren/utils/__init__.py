"""Utility helpers shared across wren subpackages."""
