"""Profile commands."""

from __future__ import annotations

import logging

from rover.domain.errors import AuthenticationFailed
from rover.domain.results import EmptySuccess, Profiles
from rover.profiles import ProfileStore

logger = logging.getLogger(__name__)


def list_profiles(store: ProfileStore) -> Profiles:
    return Profiles(profiles=tuple(store.names()))


def save_profile(store: ProfileStore, name: str, api_key: str) -> EmptySuccess:
    """
    Store an API key under ``name``.

    Raises:
        AuthenticationFailed: If ``api_key`` is blank
    """
    api_key = api_key.strip()
    if not api_key:
        raise AuthenticationFailed(profile_name=name, reason="the provided API key was empty")
    path = store.save(name, api_key)
    logger.info("Saved API key for profile %s to %s", name, path)
    return EmptySuccess()
