"""Core pipeline components."""
