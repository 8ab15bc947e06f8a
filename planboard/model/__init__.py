"""Snapshot value types, equality, codec and integrity checks."""
