"""JSON envelope rendering for every result variant and error kind."""

from __future__ import annotations

import json

import pytest

from rover.domain.build_errors import BuildErrors
from rover.domain.codes import ERROR_METADATA
from rover.domain.errors import (
    OperationCheckFailure,
    RoverError,
    UnclassifiedError,
)
from rover.domain.models import CheckResponse, ChangeSeverity, GraphRef
from rover.domain.results import (
    OUTPUT_VARIANTS,
    EmptySuccess,
    Profiles,
    RoverOutput,
    SubgraphList,
    ensure_exhaustive,
)
from rover.output.machine import UnhandledOutputError, render_machine
from tests.utils import (
    make_changes,
    make_subgraph_delete,
    make_subgraph_list,
    make_subgraph_publish,
    sample_errors,
    sample_outputs,
)


def test_sample_outputs_cover_every_variant() -> None:
    assert {type(output) for output in sample_outputs()} == set(OUTPUT_VARIANTS)


@pytest.mark.parametrize("output", sample_outputs(), ids=lambda o: type(o).__name__)
def test_every_variant_renders_as_success(output: RoverOutput) -> None:
    envelope = render_machine(output).to_dict()

    assert envelope["json_version"] == "1"
    assert envelope["data"]["success"] is True
    assert envelope["error"] is None
    json.loads(render_machine(output).to_json())


def test_empty_success_has_only_the_success_flag() -> None:
    envelope = render_machine(EmptySuccess()).to_dict()

    assert envelope == {"json_version": "1", "data": {"success": True}, "error": None}


def test_subgraph_publish_with_build_errors_is_dual_state(build_errors: BuildErrors) -> None:
    envelope = render_machine(make_subgraph_publish(build_errors)).to_dict()

    assert envelope["data"] == {
        "api_schema_hash": "123456",
        "supergraph_was_updated": False,
        "subgraph_was_created": False,
        "launch_url": "https://studio.apollographql.com/launch/1",
        "launch_cli_copy": (
            "You can monitor this launch in Apollo Studio: "
            "https://studio.apollographql.com/launch/1"
        ),
        "success": True,
    }
    assert envelope["error"] == {
        "message": (
            'Encountered 2 build errors while trying to build subgraph "subgraph" '
            'into supergraph "name@current".'
        ),
        "code": "E029",
        "details": {
            "build_errors": [
                {
                    "message": "[Accounts] -> Things went really wrong",
                    "code": "AN_ERROR_CODE",
                    "type": "composition",
                },
                {
                    "message": "[Films] -> Something else also went wrong",
                    "code": None,
                    "type": "composition",
                },
            ]
        },
    }


def test_subgraph_publish_without_build_errors_has_no_error() -> None:
    envelope = render_machine(make_subgraph_publish()).to_dict()

    assert envelope["data"]["success"] is True
    assert envelope["data"]["supergraph_was_updated"] is True
    assert envelope["error"] is None


def test_subgraph_delete_with_build_errors_is_dual_state(build_errors: BuildErrors) -> None:
    envelope = render_machine(make_subgraph_delete(build_errors)).to_dict()

    assert envelope["data"] == {"supergraph_was_updated": False, "success": True}
    assert envelope["error"]["code"] == "E029"
    assert len(envelope["error"]["details"]["build_errors"]) == 2


def test_failed_check_reports_check_fields_with_success_false(graph_ref: GraphRef) -> None:
    with pytest.raises(OperationCheckFailure) as excinfo:
        CheckResponse.try_new(
            target_url="https://studio.apollographql.com/checks/1",
            operation_check_count=10,
            changes=make_changes(failures=2, passes=1),
            result=ChangeSeverity.FAIL,
            graph_ref=graph_ref,
            core_schema_modified=False,
        )

    envelope = render_machine(excinfo.value).to_dict()

    data = envelope["data"]
    assert data["success"] is False
    assert data["failure_count"] == 2
    assert data["operation_check_count"] == 10
    assert data["target_url"] == "https://studio.apollographql.com/checks/1"
    assert [change["severity"] for change in data["changes"]] == ["FAIL", "FAIL", "PASS"]
    assert envelope["error"] == {
        "message": (
            "This operation check has encountered 2 schema changes that would break "
            "operations from existing client traffic."
        ),
        "code": "E030",
    }


def test_zero_profiles_render_an_empty_list() -> None:
    envelope = render_machine(Profiles(profiles=())).to_dict()

    assert envelope["data"] == {"profiles": [], "success": True}


def test_subgraph_list_keeps_missing_urls_null() -> None:
    envelope = render_machine(SubgraphList(list_response=make_subgraph_list())).to_dict()

    subgraphs = envelope["data"]["subgraphs"]
    assert [s["name"] for s in subgraphs] == ["accounts", "products"]
    assert subgraphs[1]["url"] is None
    assert subgraphs[0]["updated_at"]["utc"].startswith("2024-01-02T03:04:05")


def test_unclassified_error_has_null_code_and_no_details() -> None:
    envelope = render_machine(UnclassifiedError(text="something broke")).to_dict()

    assert envelope == {
        "json_version": "1",
        "data": {"success": False},
        "error": {"message": "something broke", "code": None},
    }


@pytest.mark.parametrize("error", sample_errors(), ids=lambda e: type(e).__name__)
def test_every_error_kind_renders_a_stable_code(error: RoverError) -> None:
    first = render_machine(error).to_dict()
    second = render_machine(error).to_dict()

    assert first == second
    assert first["data"]["success"] is False
    assert first["error"]["code"] == ERROR_METADATA[error.kind].code
    assert first["error"]["message"] == error.message


def test_unregistered_variant_is_rejected() -> None:
    class StrayOutput(RoverOutput):
        __slots__ = ()

    with pytest.raises(UnhandledOutputError):
        render_machine(StrayOutput())


def test_exhaustiveness_check_names_missing_variants() -> None:
    with pytest.raises(TypeError, match="EmptySuccess"):
        ensure_exhaustive({}, "test table")
