"""Exceptions and shared primitives of the domain layer."""
