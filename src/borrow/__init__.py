"""Borrow: scaffold projects from cached, placeholder-driven templates."""

__version__ = "0.3.0"
