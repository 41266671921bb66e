import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from resume_doctor.session.exceptions import CredentialStoreError

_API_KEY = "api_key"
_REMEMBER = "remember_api_key"


class BaseCredentialStore(ABC):
    """Contract for API key and "remember me" preference storage."""

    @abstractmethod
    def get_api_key(self) -> str | None: ...

    @abstractmethod
    def set_api_key(self, api_key: str) -> None: ...

    @abstractmethod
    def remove_api_key(self) -> None: ...

    @abstractmethod
    def get_remember(self) -> bool: ...

    @abstractmethod
    def set_remember(self, remember: bool) -> None: ...


class InMemoryCredentialStore(BaseCredentialStore):
    """Keeps credentials for the lifetime of the process only."""

    def __init__(self) -> None:
        self._api_key: str | None = None
        self._remember = False

    def get_api_key(self) -> str | None:
        return self._api_key

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    def remove_api_key(self) -> None:
        self._api_key = None

    def get_remember(self) -> bool:
        return self._remember

    def set_remember(self, remember: bool) -> None:
        self._remember = remember


class JsonFileCredentialStore(BaseCredentialStore):
    """Persists credentials in a user-only readable JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def get_api_key(self) -> str | None:
        value = self._read().get(_API_KEY)
        return value if isinstance(value, str) and value else None

    def set_api_key(self, api_key: str) -> None:
        data = self._read()
        data[_API_KEY] = api_key
        self._write(data)

    def remove_api_key(self) -> None:
        data = self._read()
        if data.pop(_API_KEY, None) is not None:
            self._write(data)

    def get_remember(self) -> bool:
        return bool(self._read().get(_REMEMBER, False))

    def set_remember(self, remember: bool) -> None:
        data = self._read()
        data[_REMEMBER] = remember
        self._write(data)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CredentialStoreError(f"Failed to read credentials: {exc}") from exc
        if not isinstance(data, dict):
            raise CredentialStoreError("Credential file must contain a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            os.fchmod(fd, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(data, indent=2))
        except OSError as exc:
            raise CredentialStoreError(f"Failed to write credentials: {exc}") from exc
