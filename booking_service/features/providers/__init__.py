"""Service providers (businesses offering bookable services)."""
