"""
CineRank movie catalogue and review application package.

This package contains the web application, the session manager, the catalog
query layer over the relational database, and shared utilities.
"""

__version__ = "1.0.0"
