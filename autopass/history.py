"""
Local history of generated passwords.

History file format (JSON text), newest entry first:
[
  {"password": "...", "mode": "random", "strength": {...}, "timestamp": 1700000000000},
  ...
]

When a Fernet key is supplied the same array is encrypted and wrapped:
{
  "version": 1,
  "data": "<fernet token>"
}
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Mapping

from cryptography.fernet import Fernet, InvalidToken

from .config import DEFAULT_CONFIG, AutoPassConfig, AutoPassError
from .strength import StrengthResult

logger = logging.getLogger(__name__)

HISTORY_VERSION = 1
EXPORT_TITLE = "AutoPass - Generated Passwords"


def default_history_path() -> Path:
    """
    Per-user data location for the history file, instead of the current
    working directory.
    """
    if os.name == "nt":
        base = os.getenv("APPDATA")
        base_path = Path(base) if base else Path.home() / "AppData" / "Roaming"
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else Path.home() / ".local" / "share"
    return base_path / "autopass" / "history.json"


def now_millis() -> int:
    return int(time.time() * 1000)


def generate_key() -> bytes:
    """New random key for an encrypted history file."""
    return Fernet.generate_key()


def load_or_create_key(path: Path) -> bytes:
    """
    Load the history key from ``path``, or create it there if missing.

    The key file is created with owner-only permissions on POSIX.
    """
    path = Path(path)
    try:
        if path.exists():
            key = path.read_bytes().strip()
            if key:
                return key
            raise HistoryError(f"History key file {path} is empty.")

        key = generate_key()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(key)
        if os.name == "posix":
            path.chmod(0o600)
    except OSError as exc:
        raise HistoryError(f"Cannot use history key file {path}: {exc}") from exc
    logger.debug("Created history key file %s", path)
    return key


@dataclass
class HistoryEntry:
    password: str
    # "random" or "hint"
    mode: str
    strength: StrengthResult
    # Epoch milliseconds.
    timestamp: int

    def to_dict(self) -> dict:
        return {
            "password": self.password,
            "mode": self.mode,
            "strength": self.strength.to_dict(),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "HistoryEntry":
        return cls(
            password=str(data["password"]),
            mode=str(data.get("mode", "random")),
            strength=StrengthResult.from_dict(data["strength"]),
            timestamp=int(data.get("timestamp", 0)),
        )


class HistoryError(AutoPassError):
    """Generic history error."""


class HistoryStore:
    """
    Bounded, newest-first list of generated passwords persisted as JSON.

    Plain JSON by default. Pass ``key`` (from ``generate_key()``) to keep
    the file encrypted at rest.
    """

    def __init__(
        self,
        path: Path | None = None,
        limit: int | None = None,
        key: bytes | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else (
            DEFAULT_CONFIG.history_path or default_history_path()
        )
        self.limit = limit if limit is not None else DEFAULT_CONFIG.history_limit
        try:
            self._fernet: Fernet | None = Fernet(key) if key is not None else None
        except ValueError as exc:
            raise HistoryError("History key is not a valid Fernet key.") from exc
        self._entries: list[HistoryEntry] = []

    # ---------- persistence ----------

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> None:
        """
        Read entries from disk.

        A missing or unreadable file leaves an empty history. A file that
        cannot be decrypted with the configured key raises HistoryError
        so it is not overwritten by mistake.
        """
        self._entries = []
        if not self.exists():
            return

        try:
            raw = self.path.read_text(encoding="utf-8")
            payload = json.loads(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load history from %s: %s", self.path, exc)
            return

        if self._fernet is not None:
            payload = self._decrypt(payload)
        elif isinstance(payload, dict) and "data" in payload:
            raise HistoryError("History file is encrypted; a key is required.")

        try:
            self._entries = [HistoryEntry.from_dict(item) for item in payload]
        except (TypeError, KeyError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring malformed history in %s: %s", self.path, exc)
            self._entries = []

        logger.debug("Loaded %d history entries", len(self._entries))

    def save(self) -> None:
        """Write entries to disk. Failures are logged, not raised."""
        raw_list = [e.to_dict() for e in self._entries]
        if self._fernet is not None:
            token = self._fernet.encrypt(json.dumps(raw_list).encode("utf-8"))
            text = json.dumps({"version": HISTORY_VERSION, "data": token.decode("ascii")})
        else:
            text = json.dumps(raw_list, indent=2)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to save history to %s: %s", self.path, exc)

    def _decrypt(self, payload) -> list:
        if not isinstance(payload, dict) or payload.get("version") != HISTORY_VERSION:
            raise HistoryError("History file is not encrypted or has an unsupported version.")
        try:
            plaintext = self._fernet.decrypt(payload["data"].encode("ascii"))
        except (InvalidToken, KeyError, AttributeError) as exc:
            raise HistoryError("Invalid key or corrupted history file.") from exc
        try:
            return json.loads(plaintext.decode("utf-8"))
        except json.JSONDecodeError as exc:
            raise HistoryError("History data is corrupted.") from exc

    # ---------- entries API ----------

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: HistoryEntry) -> None:
        """Insert as newest and drop anything beyond the limit."""
        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        self.save()

    def delete(self, index: int) -> HistoryEntry:
        try:
            removed = self._entries.pop(index)
        except IndexError as exc:
            raise HistoryError(f"No history entry at index {index}.") from exc
        self.save()
        return removed

    def clear(self) -> bool:
        """Remove every entry. Returns False if there was nothing to remove."""
        if not self._entries:
            return False
        self._entries = []
        self.save()
        return True

    # ---------- export ----------

    def export_text(self, now: datetime | None = None) -> str:
        if not self._entries:
            raise HistoryError("No passwords to export")

        stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        header = f"{EXPORT_TITLE}\nDate: {stamp}\n{'=' * 40}\n\n"
        body = "\n".join(f"{i}. {e.password}" for i, e in enumerate(self._entries, 1))
        return header + body

    def export_to_file(self, directory: Path, now: datetime | None = None) -> Path:
        """Write ``passwords_<epoch-millis>.txt`` into ``directory``."""
        text = self.export_text(now)
        millis = int(now.timestamp() * 1000) if now is not None else now_millis()
        target = Path(directory) / f"passwords_{millis}.txt"
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise HistoryError(f"Cannot export to {directory}: {exc.strerror or exc}") from exc
        return target


def open_history(
    config: AutoPassConfig | None = None,
    path: Path | None = None,
    key_file: Path | None = None,
) -> HistoryStore:
    """
    Open and load the history store the front ends share.

    ``path`` and ``key_file`` override the values from ``config``. With a
    key file the history is encrypted, and the key is created on first use.
    """
    cfg = config or DEFAULT_CONFIG
    key_file = key_file or cfg.history_key_file
    key = load_or_create_key(key_file) if key_file is not None else None
    store = HistoryStore(path or cfg.history_path, cfg.history_limit, key=key)
    store.load()
    return store
