"""
Gemini API key resolution.

A key can come from three places, checked in this order on every call:

1. ``ManualStorageSource``: a key the user typed in, kept in a small local
   JSON key store under ``TRAVEL_BUDDY_USER_KEY``.
2. ``ExternalBridgeSource``: a key selected through a host-provided bridge,
   only present when the host hands one in.
3. ``EnvironmentSource``: ``GEMINI_API_KEY`` or ``API_KEY`` from the
   environment / ``.env``.

Nothing is cached; the resolver reads its sources each time it is asked.
"""

from collections.abc import Sequence
from logging import getLogger
from pathlib import Path
from typing import Protocol, runtime_checkable

from orjson import JSONDecodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads

from travel_buddy.configs.settings import USER_KEY_NAME, Settings, settings
from travel_buddy.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))

# Owner read/write only
KEY_STORE_MODE = 0o600


@runtime_checkable
class CredentialSource(Protocol):
    """Protocol for anything that may hold a Gemini API key."""

    def get_key(self) -> str | None:
        """Return the key, or None when this source has none."""
        ...


@runtime_checkable
class KeyBridge(Protocol):
    """Protocol for a host environment that lets the user pick a key."""

    def has_selected_api_key(self) -> bool:
        """Check whether the user has selected a key through the host."""
        ...

    def selected_api_key(self) -> str | None:
        """Return the selected key."""
        ...


class ManualStorageSource:
    """Key entered manually by the user, persisted in a local JSON file."""

    def __init__(self, path: Path | None = None, key_name: str = USER_KEY_NAME) -> None:
        self._path = path
        self._key_name = key_name

    @property
    def path(self) -> Path:
        return self._path or settings.USER_KEY_STORE

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = orjson_loads(self.path.read_bytes())
        except JSONDecodeError:
            logger.warning(f"Ignoring unreadable key store at {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(mode=KEY_STORE_MODE, exist_ok=True)
        self.path.chmod(KEY_STORE_MODE)
        self.path.write_bytes(orjson_dumps(data))

    def get_key(self) -> str | None:
        value = self._read().get(self._key_name)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @property
    def has_key(self) -> bool:
        return self.get_key() is not None

    def save_key(self, key: str) -> None:
        """
        Store a key, replacing any previous one.

        Args:
            key: The API key. Surrounding whitespace is dropped and an
                empty key clears the store.
        """
        key = key.strip()
        if not key:
            self.clear_key()
            return
        data = self._read()
        data[self._key_name] = key
        self._write(data)
        logger.info("Manual API key saved")

    def clear_key(self) -> None:
        data = self._read()
        if data.pop(self._key_name, None) is None:
            return
        self._write(data)
        logger.info("Manual API key removed")


class ExternalBridgeSource:
    """Key selected through a host-provided ``KeyBridge``."""

    def __init__(self, bridge: KeyBridge | None = None) -> None:
        self._bridge = bridge

    @property
    def available(self) -> bool:
        return self._bridge is not None

    @property
    def key_selected(self) -> bool:
        return self._bridge is not None and self._bridge.has_selected_api_key()

    def get_key(self) -> str | None:
        if not self.key_selected:
            return None
        return self._bridge.selected_api_key() or None


class EnvironmentSource:
    """Key provided through the environment or ``.env`` file."""

    def __init__(self, config: Settings | None = None) -> None:
        self._config = config

    def get_key(self) -> str | None:
        config = self._config or settings
        return config.GEMINI_API_KEY or config.API_KEY or None


class CredentialResolver:
    """Resolve the API key from an ordered list of sources."""

    def __init__(self, sources: Sequence[CredentialSource]) -> None:
        self._sources = list(sources)

    @property
    def sources(self) -> list[CredentialSource]:
        return list(self._sources)

    def source(self, kind: type) -> CredentialSource | None:
        """Return the first configured source of the given type."""
        return next((s for s in self._sources if isinstance(s, kind)), None)

    def resolve(self) -> str:
        """
        Return the first key any source provides.

        Returns:
            The API key, or an empty string when no source has one. An empty
            key is not rejected here; Gemini rejects it on the first call.
        """
        if key := self._first_key():
            return key
        logger.warning("No Gemini API key configured")
        return ""

    @property
    def configured(self) -> bool:
        """Whether any source currently holds a key. Does not log."""
        return self._first_key() is not None

    def _first_key(self) -> str | None:
        return next((key for source in self._sources if (key := source.get_key())), None)


def default_resolver(bridge: KeyBridge | None = None) -> CredentialResolver:
    """
    Build the resolver used by the application.

    Args:
        bridge: Optional host key bridge; its source is only added when given.

    Returns:
        Resolver checking manual storage, the bridge, then the environment.
    """
    sources: list[CredentialSource] = [ManualStorageSource()]
    if bridge is not None:
        sources.append(ExternalBridgeSource(bridge))
    sources.append(EnvironmentSource())
    return CredentialResolver(sources)
