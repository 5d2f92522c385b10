"""
File storage for uploads
"""

from .file_store import FileStore, safe_filename

__all__ = ["FileStore", "safe_filename"]
