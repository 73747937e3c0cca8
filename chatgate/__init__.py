"""Chatgate: authenticated, role-gated gateway to a remote language-model service."""

__version__ = "0.1.0"
