"""Catalog types, API sets, property annotations, constraints and resolver variables for operator catalogs."""

__version__ = "0.1.0"