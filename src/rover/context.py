"""
Application Context

Everything a command needs for one invocation: resolved settings, the
dispatcher and the collaborators behind the ports. The CLI stores it on the
click context object; embedding code and tests build their own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import Settings
from .domain.errors import UnclassifiedError
from .domain.ports import (
    ClientFactory,
    CompositionEngine,
    Introspector,
    StudioClient,
    TemplateFetcher,
)
from .output.dispatch import Dispatcher
from .profiles import ProfileStore

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"


@dataclass(slots=True)
class AppContext:
    settings: Settings
    dispatcher: Dispatcher
    profile_store: ProfileStore
    client_factory: ClientFactory | None = None
    composer: CompositionEngine | None = None
    template_fetcher: TemplateFetcher | None = None
    introspector: Introspector | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        """Build a context writing to the process streams."""
        return cls(
            settings=settings,
            dispatcher=Dispatcher(settings.output_format),
            profile_store=ProfileStore(settings.config_home),
        )

    def apply_settings(self, settings: Settings) -> None:
        """Adopt settings resolved by the CLI for an injected context."""
        self.settings = settings
        self.dispatcher.output_format = settings.output_format

    def client(self, profile_name: str = DEFAULT_PROFILE) -> StudioClient:
        """
        Resolve ``profile_name`` and build a registry client for it.

        Raises:
            ProfileNotFound: If the profile does not exist
            AuthenticationFailed: If the profile has no API key
            UnclassifiedError: If no client factory is configured
        """
        if self.client_factory is None:
            raise UnclassifiedError(text="No registry client is configured for this installation")
        profile = self.profile_store.load(profile_name)
        logger.debug("Building registry client for profile %s", profile.name)
        return self.client_factory(profile)

    def require_composer(self) -> CompositionEngine:
        if self.composer is None:
            raise UnclassifiedError(text="No composition engine is configured for this installation")
        return self.composer

    def require_template_fetcher(self) -> TemplateFetcher:
        if self.template_fetcher is None:
            raise UnclassifiedError(text="No template fetcher is configured for this installation")
        return self.template_fetcher

    def require_introspector(self) -> Introspector:
        if self.introspector is None:
            raise UnclassifiedError(text="No introspection client is configured for this installation")
        return self.introspector
