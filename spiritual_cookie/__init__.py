"""Spiritual Cookie - collect prayer requests from signed-in users."""
