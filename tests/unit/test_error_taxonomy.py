"""Error kinds, their stable codes and the messages built from them."""

from __future__ import annotations

import re

import pytest

from rover.domain.build_errors import BuildError, BuildErrors
from rover.domain.codes import ERROR_METADATA, ErrorKind, explanation_for, kind_for_code
from rover.domain.errors import (
    ERROR_TYPES,
    BuildErrorsFailure,
    InvalidGraphRef,
    OperationCheckFailure,
    RoverError,
    SubgraphNotFound,
    TransportError,
    UnclassifiedError,
)
from rover.domain.models import ChangeSummary, FieldChanges, GraphRef, TypeChanges
from tests.utils import make_check_response, sample_errors

# Published codes. Changing one of these breaks scripts that match on them.
STABLE_CODES = {
    ErrorKind.INVALID_GRAPH_REF: "E001",
    ErrorKind.TRANSPORT: "E004",
    ErrorKind.MALFORMED_RESPONSE: "E005",
    ErrorKind.GRAPH_NOT_FOUND: "E008",
    ErrorKind.SUBGRAPH_NOT_FOUND: "E009",
    ErrorKind.PROFILE_NOT_FOUND: "E020",
    ErrorKind.AUTHENTICATION_FAILED: "E021",
    ErrorKind.TEMPLATE_NOT_FOUND: "E024",
    ErrorKind.NO_SUPERGRAPH_BUILDS: "E027",
    ErrorKind.BUILD_ERRORS: "E029",
    ErrorKind.OPERATION_CHECK_FAILURE: "E030",
    ErrorKind.UNKNOWN_ERROR_CODE: "E031",
    ErrorKind.UNCLASSIFIED: None,
}


def test_every_kind_has_metadata() -> None:
    assert set(ERROR_METADATA) == set(ErrorKind)


def test_codes_are_stable() -> None:
    assert {kind: metadata.code for kind, metadata in ERROR_METADATA.items()} == STABLE_CODES


def test_codes_are_unique_and_well_formed() -> None:
    codes = [metadata.code for metadata in ERROR_METADATA.values() if metadata.code is not None]

    assert len(codes) == len(set(codes))
    assert all(re.fullmatch(r"E\d{3}", code) for code in codes)


def test_code_lookup_is_the_inverse_of_the_table() -> None:
    for kind, metadata in ERROR_METADATA.items():
        if metadata.code is not None:
            assert kind_for_code(metadata.code) == kind
    assert kind_for_code(" e029 ") == ErrorKind.BUILD_ERRORS
    assert kind_for_code("E999") is None


def test_every_classified_kind_has_an_explanation() -> None:
    for metadata in ERROR_METADATA.values():
        if metadata.code is not None:
            assert explanation_for(metadata.code)


def test_each_error_class_binds_a_distinct_kind() -> None:
    kinds = [error_type.kind for error_type in ERROR_TYPES]

    assert len(kinds) == len(set(kinds))
    assert set(kinds) == set(ErrorKind)


def test_sample_errors_cover_every_class() -> None:
    assert {type(error) for error in sample_errors()} == set(ERROR_TYPES)


@pytest.mark.parametrize("error", sample_errors(), ids=lambda e: type(e).__name__)
def test_details_only_for_build_error_kinds(error: RoverError) -> None:
    if error.kind in {ErrorKind.BUILD_ERRORS, ErrorKind.NO_SUPERGRAPH_BUILDS}:
        assert len(error.details()["build_errors"]) == 2
    else:
        assert error.details() is None


def test_errors_are_exceptions_with_their_message_as_text() -> None:
    error = UnclassifiedError(text="boom")

    with pytest.raises(RoverError, match="boom"):
        raise error
    assert str(error) == "boom"
    assert error.code is None


def test_unclassified_from_exception_falls_back_to_type_name() -> None:
    assert UnclassifiedError.from_exception(ValueError("bad value")).message == "bad value"
    assert UnclassifiedError.from_exception(KeyboardInterrupt()).message == "KeyboardInterrupt"


def test_local_build_failure_message_counts_errors() -> None:
    source = BuildErrors.of([BuildError.composition_error(code="X", message="broken")])

    error = BuildErrorsFailure(source=source)

    assert error.message == "Encountered 1 build error while trying to build a supergraph."
    assert error.items() == ["broken [X]"]


def test_build_error_without_message_gets_a_placeholder() -> None:
    assert str(BuildError(message=None)) == "An unknown error occurred during composition"


def test_check_failure_message_is_singular_for_one_change(graph_ref: GraphRef) -> None:
    error = OperationCheckFailure(
        graph_ref=graph_ref, check_response=make_check_response(failures=1)
    )

    assert "encountered 1 schema change that would break" in error.message
    assert error.items() == ["FIELD_REMOVED: Type `Query`: field `removed0` removed"]


def test_subgraph_not_found_lists_valid_subgraphs() -> None:
    error = SubgraphNotFound(invalid_subgraph="reviews", valid_subgraphs=["accounts", "products"])

    assert error.items() == ["Valid subgraphs are: accounts, products"]
    assert SubgraphNotFound(invalid_subgraph="reviews").items() == []


def test_transport_error_names_the_graph(graph_ref: GraphRef) -> None:
    error = TransportError(operation="fetching graph schema", reason="timed out", graph_ref=graph_ref)

    assert error.message == (
        'Could not reach the registry while fetching graph schema for "name@current": timed out'
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [("name", "name@current"), ("name@prod", "name@prod"), ("my-graph_2@v1.2", "my-graph_2@v1.2")],
)
def test_graph_ref_parsing(value: str, expected: str) -> None:
    assert str(GraphRef.parse(value)) == expected


@pytest.mark.parametrize("value", ["", "1graph", "name@", "name@current@extra", "na me"])
def test_invalid_graph_ref_raises_e001(value: str) -> None:
    with pytest.raises(InvalidGraphRef) as excinfo:
        GraphRef.parse(value)
    assert excinfo.value.code == "E001"


def test_change_summary_text() -> None:
    assert str(ChangeSummary()) == "[No Changes]"
    summary = ChangeSummary(
        field_changes=FieldChanges(additions=3, removals=1, edits=0),
        type_changes=TypeChanges(additions=1),
    )
    assert str(summary) == "[Fields: +3 -1 △ 0, Types: +1 -0 △ 0]"
