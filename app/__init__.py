"""Posts API application package."""
