"""
File system storage component for the built site.

This module provides the `FileStorage` class, which writes built pages
(HTML text) and JSON data files below a base directory and loads them back.
It reads the base directory from the `ConfigurationManager`.
"""
import json
import os
from typing import Union, Dict, List, Optional, TYPE_CHECKING

from portfolio_site.core.exceptions import StorageError
from portfolio_site.core.logger import get_logger

if TYPE_CHECKING:
    from portfolio_site.core.config import ConfigurationManager

logger = get_logger(__name__)

# --- Custom Storage-Specific Exceptions ---
# These inherit from the core StorageError defined in core.exceptions.

class FilePathError(StorageError):
    """Raised for errors related to file paths, such as an empty filename."""
    def __init__(self, message: str):
        super().__init__(message=message)

class FileExistsError(FilePathError):
    """
    Raised when attempting to save a file that already exists, and `overwrite` is False.

    Attributes:
        path (str): The full path to the file that already exists.
    """
    def __init__(self, path: str):
        super().__init__(f"File already exists at path: {path}. Set overwrite=True to replace it.")
        self.path = path

class FileNotFound(FilePathError):
    """Raised when a file is not found."""
    def __init__(self, path: str):
        super().__init__(f"File not found at path: {path}.")
        self.path = path

class SerializationError(StorageError):
    """Raised for errors during data serialization (e.g., JSON encoding/decoding issues)."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        full_message = f"Serialization error: {message}"
        if original_exception:
            full_message += f" (Original exception: {str(original_exception)})"
        super().__init__(message=full_message)
        self.original_exception = original_exception


class FileStorage:
    """
    Manages saving and loading site files (HTML pages, JSON data) on the local file system.
    """
    DEFAULT_STORAGE_PATH = "dist"

    def __init__(self, config: Optional['ConfigurationManager'] = None, base_path: Optional[str] = None):
        """
        Initializes the FileStorage.

        Args:
            config (Optional[ConfigurationManager]): Supplies `components.file_storage.base_path`.
            base_path (Optional[str]): Explicit base directory; takes precedence over the config.
                Relative paths are resolved against the current working directory.

        Raises:
            StorageError: If the base path cannot be created or accessed.
        """
        configured_base_path = base_path
        if configured_base_path is None and config:
            configured_base_path = config.get('components.file_storage.base_path')

        self.base_path = os.path.abspath(configured_base_path or self.DEFAULT_STORAGE_PATH)
        logger.info(f"FileStorage initialized with base_path: {self.base_path}")

        try:
            os.makedirs(self.base_path, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create or access base directory '{self.base_path}': {e}", exc_info=True)
            raise StorageError(message=f"Failed to create or access base directory '{self.base_path}': {e}")

    def _get_full_path(self, filename: str, extension: str = ".json") -> str:
        """Helper to construct the full file path and ensure filename ends with extension."""
        if not filename or not filename.strip():
            raise FilePathError("Filename cannot be empty.")

        filename = filename.strip()
        _, ext = os.path.splitext(filename)
        actual_filename = filename if ext.lower() == extension.lower() else filename + extension

        full_path = os.path.abspath(os.path.join(self.base_path, actual_filename))
        if os.path.commonpath([full_path, self.base_path]) != self.base_path:
            raise FilePathError(f"Filename '{filename}' resolves outside of the storage directory.")
        return full_path

    def _ensure_parent(self, full_path: str) -> None:
        os.makedirs(os.path.dirname(full_path), exist_ok=True)

    def save_text(self, content: str, filename: str, extension: str = ".html", overwrite: bool = False) -> str:
        """
        Saves text content (a built page) within the base_path.

        Args:
            content (str): The text to write.
            filename (str): File name, relative to the base path; sub-directories are created.
            extension (str): Extension appended when missing. Defaults to ".html".
            overwrite (bool): Replace an existing file. Defaults to False.

        Returns:
            str: The full path to the saved file.

        Raises:
            FileExistsError: If overwrite is False and the file already exists.
            StorageError: For other IO/OS errors.
        """
        full_path = self._get_full_path(filename, extension=extension)

        if not overwrite and os.path.exists(full_path):
            logger.warning(f"File already exists at {full_path} and overwrite is False.")
            raise FileExistsError(path=full_path)

        try:
            self._ensure_parent(full_path)
            with open(full_path, 'w', encoding='utf-8') as f:
                f.write(content)
            logger.info(f"Content successfully saved to {full_path}")
            return full_path
        except OSError as e:
            logger.error(f"Failed to save file '{full_path}': {e}", exc_info=True)
            raise StorageError(message=f"Failed to save file '{full_path}': {e}")

    def load_text(self, filename: str, extension: str = ".html") -> str:
        """
        Raises:
            FileNotFound: If the file does not exist.
            StorageError: For other IO/OS errors.
        """
        full_path = self._get_full_path(filename, extension=extension)
        if not os.path.exists(full_path):
            raise FileNotFound(path=full_path)
        try:
            with open(full_path, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            raise StorageError(message=f"Failed to load file '{full_path}': {e}")

    def save_json(self, data: Union[Dict, List], filename: str, overwrite: bool = False) -> str:
        """
        Saves the given data to a JSON file within the base_path.

        Returns:
            str: The full path to the saved file.

        Raises:
            FileExistsError: If overwrite is False and the file already exists.
            SerializationError: If the data cannot be encoded as JSON.
            StorageError: For other IO/OS errors.
        """
        try:
            payload = json.dumps(data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"JSON serialization failed for file '{filename}': {e}", exc_info=True)
            raise SerializationError(message=f"Failed to serialize data to JSON for file '{filename}'.", original_exception=e)
        return self.save_text(payload, filename, extension=".json", overwrite=overwrite)

    def load_json(self, filename: str) -> Union[Dict, List]:
        """
        Loads and returns data from a JSON file within the base_path.

        Raises:
            FileNotFound: If the file does not exist.
            SerializationError: If there's an error during JSON decoding.
            StorageError: For other IO/OS errors.
        """
        raw = self.load_text(filename, extension=".json")
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise SerializationError(message=f"Failed to decode JSON from file '{filename}'", original_exception=e)

    def delete_file(self, filename: str, extension: str = ".html") -> bool:
        """
        Deletes a file within the base_path.

        Returns:
            bool: True if deletion was successful, False if file not found.

        Raises:
            StorageError: For permission errors or other OS issues.
        """
        full_path = self._get_full_path(filename, extension=extension)
        try:
            if os.path.exists(full_path):
                os.remove(full_path)
                return True
            return False
        except OSError as e:
            raise StorageError(message=f"Error deleting file '{full_path}': {e}")
