"""Shared helpers for fetching and parsing host pages."""
