"""Build Bookmarks: save, recall and re-run named build commands."""

__version__ = "0.1.0"
