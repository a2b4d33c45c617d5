"""Bookable services offered by providers."""
