import io
from collections.abc import Callable
from pathlib import Path

import pytest

from rover.config import OutputFormat, Settings
from rover.context import AppContext
from rover.domain.build_errors import BuildErrors
from rover.domain.models import GraphRef
from rover.output.dispatch import Dispatcher
from rover.profiles import ProfileStore
from tests.utils import FakeStudioClient, client_factory_for, make_build_errors, make_graph_ref

API_KEY = "service:name:abc123"


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch):
    """Keep rich from forcing colors or a terminal when CI asks for them"""
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE", "ROVER_FORMAT", "ROVER_LOG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def graph_ref() -> GraphRef:
    return make_graph_ref()


@pytest.fixture
def build_errors() -> BuildErrors:
    return make_build_errors()


@pytest.fixture
def config_home(tmp_path: Path) -> Path:
    """Empty configuration home"""
    home = tmp_path / "rover-home"
    home.mkdir()
    return home


@pytest.fixture
def profile_store(config_home: Path) -> ProfileStore:
    return ProfileStore(config_home, environ={})


@pytest.fixture
def make_dispatcher() -> Callable[..., tuple[Dispatcher, io.StringIO, io.StringIO]]:
    """Factory for a dispatcher writing to in-memory streams"""

    def _make(
        output_format: OutputFormat = OutputFormat.PLAIN, *, interactive: bool = False
    ) -> tuple[Dispatcher, io.StringIO, io.StringIO]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        dispatcher = Dispatcher(
            output_format, stdout=stdout, stderr=stderr, is_interactive=lambda: interactive
        )
        return dispatcher, stdout, stderr

    return _make


@pytest.fixture
def make_app(config_home: Path) -> Callable[..., AppContext]:
    """
    Factory for an application context wired to fakes.

    The dispatcher uses the process streams so CliRunner captures them, and
    the API key comes from the environment mapping so no profile files are
    needed.
    """

    def _make(
        client: FakeStudioClient | None = None, *, interactive: bool = False, **collaborators
    ) -> AppContext:
        settings = Settings(config_home=config_home)
        return AppContext(
            settings=settings,
            dispatcher=Dispatcher(settings.output_format, is_interactive=lambda: interactive),
            profile_store=ProfileStore(config_home, environ={"ROVER_API_KEY": API_KEY}),
            client_factory=client_factory_for(client) if client is not None else None,
            **collaborators,
        )

    return _make
