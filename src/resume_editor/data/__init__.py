"""Durable storage backed by SQLAlchemy."""
