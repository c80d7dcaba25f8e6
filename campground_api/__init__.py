"""Campground listings and reviews API."""

__version__ = "1.0.0"
