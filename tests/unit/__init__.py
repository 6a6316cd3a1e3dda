"""Unit tests for the schema, handlers and orchestrators."""
