"""Common constants shared across the toolkit."""
