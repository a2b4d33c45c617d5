"""``python -m booking_service.main`` entry point (same as the ``booking-service`` script)."""

from __future__ import annotations

from booking_service.cli.main import main

if __name__ == "__main__":
    main()
