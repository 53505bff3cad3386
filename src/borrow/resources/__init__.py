"""Packaged resources for borrow."""
