"""
API Routes Module

This module contains the API endpoint implementations:
- generation.py: Energy generation record queries

All routers are combined in main.py to create the complete API.
"""

from .generation import router as generation_router

__all__ = [
    "generation_router",
]
