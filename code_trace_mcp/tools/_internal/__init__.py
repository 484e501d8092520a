"""Helpers shared by the tool implementations."""
