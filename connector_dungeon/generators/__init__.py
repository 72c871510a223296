"""Generators: geometry kernel, structure primitives and layout engines."""
