"""Tripcraft - travel itinerary generation and refinement."""

__version__ = "0.1.0"
