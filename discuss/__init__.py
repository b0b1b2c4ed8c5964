"""Discuss threads - in-memory threaded comment engine and host service."""
