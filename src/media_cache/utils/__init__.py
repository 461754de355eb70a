"""Utility modules for media cache: identifiers, the persisted entry format,
supported media types and logging setup."""
