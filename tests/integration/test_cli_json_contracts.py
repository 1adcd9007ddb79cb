"""JSON contract checks for commands consumed by scripts."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.utils import (
    SDL,
    FakeStudioClient,
    FakeTemplateFetcher,
    make_build_errors,
    make_subgraph_publish,
)
from tests.utils.cli_helpers import invoke_cli, parse_envelope


def _read_contract_fixture(name: str) -> dict[str, object]:
    fixture_path = Path(__file__).resolve().parents[1] / "fixtures" / "envelopes" / name
    return json.loads(fixture_path.read_text(encoding="utf-8"))


@pytest.mark.integration
def test_subgraph_publish_build_errors_contract(make_app) -> None:
    contract = _read_contract_fixture("subgraph_publish.build_errors.json")
    client = FakeStudioClient(
        publish_subgraph=make_subgraph_publish(make_build_errors()).publish_response
    )

    result = invoke_cli(
        "--format", "json",
        "subgraph", "publish", "name", "--name", "subgraph", "--schema", "-",
        app=make_app(client),
        input=SDL,
    )

    assert result.exit_code == 0
    assert parse_envelope(result) == contract


@pytest.mark.integration
def test_profile_list_empty_contract(config_home: Path) -> None:
    contract = _read_contract_fixture("profiles.empty.json")

    result = invoke_cli("--config-home", str(config_home), "--format", "json", "profile", "list")

    assert result.exit_code == 0
    assert parse_envelope(result) == contract
    assert result.stderr == ""


@pytest.mark.integration
def test_empty_success_contract(config_home: Path) -> None:
    contract = _read_contract_fixture("profile_auth.success.json")

    result = invoke_cli(
        "--config-home", str(config_home), "--format", "json",
        "profile", "auth", "default",
        input="service:name:key\n",
    )

    assert result.exit_code == 0
    assert parse_envelope(result) == contract


@pytest.mark.integration
def test_error_contract(make_app, tmp_path: Path) -> None:
    contract = _read_contract_fixture("template_use.not_found.json")

    result = invoke_cli(
        "--format", "json", "template", "use", "subgraph-cobol", str(tmp_path),
        app=make_app(template_fetcher=FakeTemplateFetcher()),
    )

    assert result.exit_code == 1
    assert parse_envelope(result) == contract


@pytest.mark.integration
@pytest.mark.parametrize(
    "args",
    [
        ("docs", "list"),
        ("explain", "E001"),
        ("template", "list"),
        ("template", "list", "--language", "kotlin"),
        ("explain", "nope"),
        ("graph", "fetch", "name"),
    ],
)
def test_every_command_writes_one_versioned_envelope(config_home: Path, args: tuple[str, ...]) -> None:
    result = invoke_cli("--config-home", str(config_home), "--format", "json", *args)

    envelope = parse_envelope(result)
    assert set(envelope) == {"json_version", "data", "error"}
    assert envelope["json_version"] == "1"
    assert envelope["data"]["success"] is (envelope["error"] is None)
    assert result.exit_code == (0 if envelope["error"] is None else 1)
