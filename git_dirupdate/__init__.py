"""
Bulk-update every git repository below a directory tree.

Discovers repositories, fetches their remotes and fast-forwards the selected
branches, optionally stashing local modifications first.
"""

__version__ = "0.1.0"
