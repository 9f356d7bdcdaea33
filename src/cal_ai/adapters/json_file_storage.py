"""Key-value storage kept as JSON files in a local directory."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from cal_ai.services.registry import KeyValueStorage


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Stores each key as ``<data_dir>/<key>.json``."""

    data_dir: Path

    def get(self, key: str) -> object | None:
        path = self._path(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def set(self, key: str, value: object) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(
            json.dumps(value, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        os.replace(tmp_path, path)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"
