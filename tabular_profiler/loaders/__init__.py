"""Delimited text loading, dialect detection and tokenizing."""
