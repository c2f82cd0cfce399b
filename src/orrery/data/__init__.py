"""Built-in data tables."""
