"""Literasi Admin - Services Package

This package contains service modules for the backend integration:
- HTTP client abstraction
- Catalog API client (books, ISBN lookup, users)
"""
