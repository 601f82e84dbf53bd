"""Persistence: key-value stores and JSON serializers."""
