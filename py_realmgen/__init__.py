"""Procedural realm maps: a Voronoi mainland split into regions and countries."""

__version__ = "0.1.0"
