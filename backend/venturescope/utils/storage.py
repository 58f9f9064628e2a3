import os
import json
from typing import Any, Optional
from .config import settings
from .logger import storage_logger as logger


class StorageService:
    """Centralized service for handling JSON file operations"""

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = base_dir or settings.SESSIONS_DIR
        os.makedirs(self.base_dir, exist_ok=True)

    def save_data(self, data: Any, identifier: str) -> str:
        """Save a JSON-serializable value under an identifier"""
        return self._save_json(data, self.get_file_path(identifier))

    def load_data(self, identifier: str) -> Optional[Any]:
        """Load the value saved under an identifier, None if nothing is stored"""
        filepath = self.get_file_path(identifier)
        if not os.path.exists(filepath):
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable data file {filepath}: {str(e)}")
            return None

    def delete_data(self, identifier: str) -> bool:
        """Remove the file for an identifier; False if it did not exist"""
        filepath = self.get_file_path(identifier)
        if not os.path.exists(filepath):
            return False
        os.remove(filepath)
        logger.info(f"Deleted {filepath}")
        return True

    def get_file_path(self, identifier: str) -> str:
        """Get the path of the data file for an identifier"""
        return os.path.join(self.base_dir, f"{self._clean_filename(identifier)}.json")

    def _clean_filename(self, name: str) -> str:
        """Clean a string to be used in a filename"""
        return ''.join(c for c in name if c.isalnum() or c in (' ', '-', '_')).strip().replace(' ', '_')

    def _save_json(self, data: Any, filepath: str) -> str:
        """Save JSON data to file, replacing any previous content atomically"""
        try:
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
            tmp_path = f"{filepath}.tmp"
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, filepath)
            logger.info(f"Saved data to {filepath}")
            return filepath
        except Exception as e:
            logger.error(f"Error saving to {filepath}: {str(e)}")
            raise
