"""Integrity validation, type inference, statistics and profile assembly."""
