"""Fractalizer: transform entities into API resources with on-demand includes."""

__version__ = "0.3.0"
