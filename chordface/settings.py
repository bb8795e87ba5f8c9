"""Persisted watch face settings (JSON record of FaceConfig)."""

import json
import logging
import os
import tempfile
from pathlib import Path

from .config import FaceConfig, InvalidConfig, FIELDS

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".chordface.json"
SETTINGS_VERSION = 1


class SettingsStore:
    """
    Reads and writes the settings record.

    The record holds exactly the FaceConfig fields plus a version tag.
    A missing, unreadable or invalid record yields the defaults; it is
    never fatal.
    """

    def __init__(self, path=DEFAULT_SETTINGS_PATH):
        self.path = Path(path)

    def load(self) -> FaceConfig:
        if not self.path.exists():
            logger.info(f"No settings at {self.path}, using defaults.")
            return FaceConfig()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise InvalidConfig("settings record is not an object")
            if data.get("version", SETTINGS_VERSION) != SETTINGS_VERSION:
                raise InvalidConfig(f"unsupported settings version {data.get('version')!r}")
            missing = [k for k in FIELDS if k not in data]
            if missing:
                raise InvalidConfig(f"missing field(s): {', '.join(missing)}")
            config = FaceConfig.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Ignoring corrupt settings '{self.path}': {e}")
            return FaceConfig()
        logger.debug(f"Loaded settings from {self.path}: {config}")
        return config

    def save(self, config: FaceConfig) -> None:
        """Write the record atomically (temp file + rename)."""
        record = {"version": SETTINGS_VERSION, **config.to_dict()}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".chordface-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        logger.info(f"Settings saved to: {self.path}")
