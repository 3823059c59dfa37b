"""Credential stores holding the generation service secret."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from pagedigest.tracing import CustomSpanKinds, trace_operation

logger = logging.getLogger(__name__)


class InMemoryCredentialStore:
    """Process-local store. Used when nothing has to survive a restart."""

    def __init__(self, credential: str | None = None) -> None:
        self._credential = credential or None

    def get(self) -> str | None:
        return self._credential

    def set(self, credential: str) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None


class FileCredentialStore:
    """
    Store a single named secret in a JSON file so it persists across sessions.

    The file maps credential names to values, so several stores (one per key)
    can share it. Writes replace the file atomically and restrict it to the
    owner. No validation of the secret itself happens here; only the remote
    service can tell whether it is correct.
    """

    _lock = threading.Lock()

    def __init__(self, path: str | Path | None = None, key: str | None = None) -> None:
        from pagedigest import config

        self.path = Path(path) if path is not None else config.CREDENTIAL_STORE_PATH
        self.key = key or config.CREDENTIAL_KEY

    @trace_operation(category=CustomSpanKinds.CREDENTIAL.value)
    def get(self) -> str | None:
        value = self._read().get(self.key)
        if isinstance(value, str) and value:
            return value
        return None

    @trace_operation(category=CustomSpanKinds.CREDENTIAL.value)
    def set(self, credential: str) -> None:
        with self._lock:
            data = self._read()
            data[self.key] = credential
            self._write(data)
        logger.info(f"Stored credential '{self.key}' in {self.path}")

    @trace_operation(category=CustomSpanKinds.CREDENTIAL.value)
    def clear(self) -> None:
        with self._lock:
            data = self._read()
            if self.key not in data:
                return
            del data[self.key]
            self._write(data)
        logger.info(f"Cleared credential '{self.key}' from {self.path}")

    def _read(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Credential file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Credential file {self.path} must contain a JSON object")
        return data

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".credentials-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = ["InMemoryCredentialStore", "FileCredentialStore"]
