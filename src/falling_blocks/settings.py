from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union


SETTINGS_KEY = "tetris-settings"
BEST_SCORE_KEY = "tetris-best-score"
STORAGE_FILENAME = "falling_blocks.json"
DEFAULT_STORAGE_DIR = Path.home() / ".falling_blocks"


@dataclass
class Settings:
    ghost_piece_enabled: bool = True
    hard_drop_enabled: bool = True
    jk_rotation_reversed: bool = False

    def toggle_ghost_piece(self) -> None:
        self.ghost_piece_enabled = not self.ghost_piece_enabled

    def toggle_hard_drop(self) -> None:
        self.hard_drop_enabled = not self.hard_drop_enabled

    def toggle_jk_rotation(self) -> None:
        self.jk_rotation_reversed = not self.jk_rotation_reversed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Defaults overlaid with the known keys of ``data``."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class SettingsStore:
    """JSON file holding settings and best score under host storage keys."""

    def __init__(self, directory: Union[str, Path, None] = None) -> None:
        self.directory = Path(directory) if directory is not None else DEFAULT_STORAGE_DIR
        self.path = self.directory / STORAGE_FILENAME

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Failed to read {self.path}: {exc}", file=sys.stderr)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def load_settings(self) -> Settings:
        raw = self._read().get(SETTINGS_KEY)
        if not isinstance(raw, dict):
            return Settings()
        try:
            return Settings.from_dict(raw)
        except (TypeError, ValueError) as exc:
            print(f"Failed to load settings: {exc}", file=sys.stderr)
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        self._write(SETTINGS_KEY, asdict(settings))

    def load_best_score(self) -> int:
        raw: Optional[Any] = self._read().get(BEST_SCORE_KEY)
        if raw is None:
            return 0
        try:
            return int(raw)
        except (TypeError, ValueError):
            return 0

    def save_best_score(self, score: int) -> None:
        self._write(BEST_SCORE_KEY, str(int(score)))
