"""
Search reindexer

Touches every document of the search-enabled MongoDB collections so their
post-save search hook pushes them to the index again.
"""

__version__ = "0.1.0"
