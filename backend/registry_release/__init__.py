"""Registry Release — publish plugin archives to a plugin registry."""

__version__ = "1.0.0"
