"""Unstructured meshes, cell quality measures, level sets and quadrature helpers."""

__version__ = "0.1.0"