"""Import/export adapters and sample data."""
