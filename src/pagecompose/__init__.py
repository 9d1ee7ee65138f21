"""
pagecompose - identity-preserving page content composition

pagecompose composes a tree of keyed content units from query results,
mutation handles and form values, re-rendering only the units whose
declared dependencies changed.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
