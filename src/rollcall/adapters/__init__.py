"""Concrete adapters for the domain ports."""
