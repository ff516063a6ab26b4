"""Tracking client utilities."""
