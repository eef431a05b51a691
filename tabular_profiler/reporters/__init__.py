"""Exports of profiling results."""
