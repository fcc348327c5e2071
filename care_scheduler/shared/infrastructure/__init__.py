"""Shared infrastructure: database connection and session management."""
