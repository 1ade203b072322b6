"""
Storage component for the portfolio site builder.

Provides `FileStorage` for writing built pages and data files.
"""
from .file_storage import FileStorage, FilePathError, FileExistsError, FileNotFound, SerializationError

__all__ = [
    "FileStorage",
    "FilePathError",
    "FileExistsError",
    "FileNotFound",
    "SerializationError",
]
