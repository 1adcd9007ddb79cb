"""
Profiles

Named credential sets stored under ``<config_home>/profiles/<name>/``. Each
profile directory holds a ``.sensitive`` JSON file with the profile's API key.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .config import API_KEY_ENV
from .domain.errors import AuthenticationFailed, ProfileNotFound

logger = logging.getLogger(__name__)

SENSITIVE_FILE = ".sensitive"


@dataclass(slots=True, frozen=True)
class Profile:
    name: str
    api_key: str

    def __repr__(self) -> str:
        return f"Profile(name={self.name!r}, api_key='****')"


class ProfileStore:
    """Reads profiles from the configuration home."""

    def __init__(self, config_home: Path, environ: Mapping[str, str] | None = None) -> None:
        self.config_home = config_home
        self._environ = environ if environ is not None else os.environ

    @property
    def profiles_dir(self) -> Path:
        return self.config_home / "profiles"

    def profile_dir(self, name: str) -> Path:
        """
        Return the directory holding ``name``.

        Raises:
            ProfileNotFound: If ``name`` is not a single path component
        """
        if not name or name in (".", "..") or any(sep in name for sep in ("/", "\\")):
            raise ProfileNotFound(profile_name=name)
        return self.profiles_dir / name

    def names(self) -> list[str]:
        """Return profile names in sorted order (empty when none exist)."""
        if not self.profiles_dir.is_dir():
            return []
        return sorted(entry.name for entry in self.profiles_dir.iterdir() if entry.is_dir())

    def load(self, name: str) -> Profile:
        """
        Resolve the credentials for ``name``.

        The API key environment variable takes precedence over stored keys.

        Raises:
            ProfileNotFound: If no profile directory exists for ``name`` or the name
                is not a valid profile name
            AuthenticationFailed: If the profile has no readable API key
        """
        profile_dir = self.profile_dir(name)
        env_key = self._environ.get(API_KEY_ENV, "").strip()
        if env_key:
            logger.debug("Using API key from %s instead of profile %s", API_KEY_ENV, name)
            return Profile(name=name, api_key=env_key)

        if not profile_dir.is_dir():
            raise ProfileNotFound(profile_name=name)

        sensitive = profile_dir / SENSITIVE_FILE
        try:
            payload = json.loads(sensitive.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise AuthenticationFailed(profile_name=name) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise AuthenticationFailed(
                profile_name=name, reason="the stored credentials could not be read"
            ) from e

        api_key = payload.get("api_key") if isinstance(payload, dict) else None
        if not isinstance(api_key, str) or not api_key.strip():
            raise AuthenticationFailed(profile_name=name)
        return Profile(name=name, api_key=api_key.strip())

    def save(self, name: str, api_key: str) -> Path:
        """
        Store ``api_key`` for ``name``, creating the profile if needed.

        Raises:
            ProfileNotFound: If ``name`` is not a valid profile name
        """
        profile_dir = self.profile_dir(name)
        profile_dir.mkdir(parents=True, exist_ok=True)
        sensitive = profile_dir / SENSITIVE_FILE
        sensitive.write_text(json.dumps({"api_key": api_key}), encoding="utf-8")
        return sensitive
