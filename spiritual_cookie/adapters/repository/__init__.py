"""Repository adapters - Database implementations."""

from .postgres import PostgresPrayerRequestRepository, run_migrations

__all__ = ["PostgresPrayerRequestRepository", "run_migrations"]
