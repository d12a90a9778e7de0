# =============================================================================
# Label Manager - Package
# =============================================================================
"""
Label manager package.

Manages GitHub labels and milestones through the REST API, including:
- Listing entries page by page from a home or template repository
- Creating, updating and deleting entries in the home repository
- Copying a template repository's entries into the home repository
- An MCP / HTTP service exposing the operations as tools
"""

__version__ = "0.1.0"
