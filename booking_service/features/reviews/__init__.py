"""Reviews feature: one review per completed booking."""
