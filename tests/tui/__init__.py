"""Interaction tests driving mounted forms."""
