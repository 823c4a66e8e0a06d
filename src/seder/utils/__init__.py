"""Utility functions for seder."""
