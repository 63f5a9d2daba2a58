"""Plotkeeper: plots, planting rows, categories and custom row fields."""

__version__ = "1.0.0"
