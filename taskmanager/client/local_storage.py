import json
import logging
import os


logger = logging.getLogger(__name__)


class LocalStorage:
    """
    Durable key -> JSON value store backed by one file.

    Behaves like a browser's localStorage: reads never fail (a missing or
    unreadable file is an empty store) and every write rewrites the file.
    """

    def __init__(self, path):
        self.path = os.fspath(path)
        self._data = self._read()

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError):
            logger.exception("Failed to read local storage %s; starting empty.", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage %s is not a JSON object; starting empty.", self.path)
            return {}
        return data

    def _write(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh, ensure_ascii=False, indent=2)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self._write()

    def remove(self, key):
        if key in self._data:
            del self._data[key]
            self._write()
