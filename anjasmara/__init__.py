"""Thin relay between a browser UI and a hosted chat-completion API."""

__version__ = "0.1.0"
