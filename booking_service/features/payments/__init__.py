"""Payments feature: one payment per booking, read-only over HTTP."""
