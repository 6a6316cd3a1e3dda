"""Utility helpers for the form engine."""
