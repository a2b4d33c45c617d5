"""Append-only audit log of domain actions."""
