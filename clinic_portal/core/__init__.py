"""Shared security, permission, concurrency and middleware utilities."""
