"""Device key/value storage backed by a JSON file."""

import json
from pathlib import Path
from typing import Any, Dict, Optional


class LocalStorage:
    """Handles reading and writing string values to a JSON file.

    Mirrors the AsyncStorage contract of the mobile app: values are strings
    (callers store JSON documents) and every write goes straight to disk.

    Attributes:
        file_path: Path to the JSON file holding all keys
    """

    def __init__(self, file_path: str = "taskmanager_storage.json"):
        self.file_path = Path(file_path)
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Create the storage file if it doesn't exist."""
        if not self.file_path.exists():
            self.file_path.write_text("{}")

    def _read(self) -> Dict[str, str]:
        """Load every key.

        Raises:
            ValueError: If the JSON file is corrupted
        """
        try:
            data = json.loads(self.file_path.read_text() or "{}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupted storage file: {e}")
        if not isinstance(data, dict):
            raise ValueError("Corrupted storage file: expected an object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.file_path.write_text(json.dumps(data, indent=2))

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def get_json(self, key: str, default: Any = None) -> Any:
        """Decode a stored JSON document, ``default`` if the key is absent."""
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupted value for '{key}': {e}")

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, default=str))
