"""Admin management of staff accounts."""
