"""Inkwell: a moderation-gated blogging backend."""

__version__ = "0.1.0"
