"""Database connection and storage."""
