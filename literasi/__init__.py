"""Literasi Admin - Core Application Package

This package contains the admin console modules for the community library:
- Book acquisition workflow (workflow.py)
- Catalog and user listings (dashboard.py)
- Admin session handling (session.py)
- Data models (book.py, user.py)
- Error taxonomy (errors.py)
"""

__version__ = "1.0.0"
