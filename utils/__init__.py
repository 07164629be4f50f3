"""Literasi Admin - Utilities Package

- Form validators
- CLI output helpers
"""
