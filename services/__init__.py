"""Exercise tracker services."""
