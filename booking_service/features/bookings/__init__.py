"""Bookings of a service slot by a user."""
