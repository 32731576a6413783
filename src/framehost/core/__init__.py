"""Core types: interfaces, models, results and errors."""
