"""
Top-level package for the gene essentiality map.

This package exposes the data pipeline (query, normalise, filter) and the
Dash UI that renders it.
Most code should import from submodules such as:
    essentiality_map.core
    essentiality_map.services
    essentiality_map.ui
"""

__all__: list[str] = []
