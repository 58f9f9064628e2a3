"""
Routes package for API endpoints.

This package provides:
- The startup evaluation endpoint
"""

__all__ = [
    "evaluate"
]
