"""Command handlers called directly with fake collaborators."""

from __future__ import annotations

from pathlib import Path

import pytest

from rover import commands
from rover.domain.errors import (
    AuthenticationFailed,
    BuildErrorsFailure,
    GraphNotFound,
    OperationCheckFailure,
    SubgraphNotFound,
    TemplateNotFound,
    TransportError,
    UnclassifiedError,
    UnknownErrorCode,
)
from rover.domain.models import (
    CheckRequestSuccessResult,
    CompositionOutput,
    FetchResponse,
    GraphRef,
    ProjectLanguage,
    Sdl,
    SdlType,
)
from rover.domain.ports import StudioClient
from rover.domain.results import (
    AsyncCheck,
    Check,
    CompositionResult,
    EmptySuccess,
    SupergraphSchema,
)
from rover.profiles import ProfileStore
from tests.utils import (
    SDL,
    FakeComposer,
    FakeIntrospector,
    FakeStudioClient,
    FakeTemplateFetcher,
    make_build_errors,
    make_check_response,
    make_subgraph_delete,
    make_subgraph_list,
)


def test_fake_client_satisfies_the_port() -> None:
    assert isinstance(FakeStudioClient(), StudioClient)


def test_explain_known_code() -> None:
    output = commands.explain("e029")

    assert output.explanation_markdown.startswith("**E029**")


def test_explain_unknown_code() -> None:
    with pytest.raises(UnknownErrorCode) as excinfo:
        commands.explain("E999")
    assert excinfo.value.code == "E031"


def test_list_docs_is_keyed_by_slug() -> None:
    output = commands.list_docs()

    assert "docs" in output.shortlinks
    assert output.shortlinks["api-keys"] == "Understanding Apollo's API Keys"


def test_open_docs_launches_the_url() -> None:
    opened: list[str] = []

    assert commands.open_docs("start", launcher=opened.append) == EmptySuccess()
    assert opened == ["https://www.apollographql.com/docs/rover/getting-started"]


def test_open_docs_rejects_unknown_slug() -> None:
    with pytest.raises(UnclassifiedError, match="rover docs list"):
        commands.open_docs("nope", launcher=lambda _url: None)


def test_save_profile_rejects_blank_keys(profile_store: ProfileStore) -> None:
    with pytest.raises(AuthenticationFailed):
        commands.save_profile(profile_store, "default", "   ")
    assert profile_store.names() == []


def test_save_profile_then_list(profile_store: ProfileStore) -> None:
    commands.save_profile(profile_store, "default", " service:key ")

    assert commands.list_profiles(profile_store).profiles == ("default",)
    assert profile_store.load("default").api_key == "service:key"


def test_template_list_filters_by_language() -> None:
    output = commands.list_template_catalog(ProjectLanguage.PYTHON)

    assert output.templates
    assert {t.language for t in output.templates} == {ProjectLanguage.PYTHON}


def test_template_list_with_no_match_fails() -> None:
    with pytest.raises(UnclassifiedError, match="No templates matched the provided filters"):
        commands.list_template_catalog(ProjectLanguage.KOTLIN)


def test_use_template_fetches_into_path(tmp_path: Path) -> None:
    fetcher = FakeTemplateFetcher()
    target = tmp_path / "new-project"

    output = commands.use_template(fetcher, "subgraph-rust-async-graphql", target)

    assert output.path == target
    assert fetcher.fetched == [("subgraph-rust-async-graphql", target)]


def test_use_template_refuses_non_empty_dir(tmp_path: Path) -> None:
    (tmp_path / "existing.txt").write_text("x", encoding="utf-8")

    with pytest.raises(UnclassifiedError, match="not empty"):
        commands.use_template(FakeTemplateFetcher(), "subgraph-rust-async-graphql", tmp_path)


def test_use_unknown_template() -> None:
    with pytest.raises(TemplateNotFound):
        commands.use_template(FakeTemplateFetcher(), "subgraph-cobol", Path("x"))


def test_connection_errors_become_transport_errors(graph_ref: GraphRef) -> None:
    client = FakeStudioClient(fetch_graph=ConnectionError("connection refused"))

    with pytest.raises(TransportError) as excinfo:
        commands.fetch_graph(client, graph_ref)

    error = excinfo.value
    assert error.code == "E004"
    assert error.message == (
        'Could not reach the registry while fetching graph schema for "name@current": '
        "connection refused"
    )
    assert isinstance(error.__cause__, ConnectionError)


def test_timeouts_without_text_use_the_type_name(graph_ref: GraphRef) -> None:
    client = FakeStudioClient(publish_readme=TimeoutError())

    with pytest.raises(TransportError, match="TimeoutError"):
        commands.publish_readme(client, graph_ref, "# readme")


def test_classified_client_errors_pass_through(graph_ref: GraphRef) -> None:
    client = FakeStudioClient(fetch_graph=GraphNotFound(graph_ref=graph_ref))

    with pytest.raises(GraphNotFound):
        commands.fetch_graph(client, graph_ref)


def test_missing_subgraph_lists_the_valid_ones(graph_ref: GraphRef) -> None:
    client = FakeStudioClient(
        fetch_subgraph=SubgraphNotFound(invalid_subgraph="reviews"),
        list_subgraphs=make_subgraph_list(),
    )

    with pytest.raises(SubgraphNotFound) as excinfo:
        commands.fetch_subgraph(client, graph_ref, "reviews")

    assert excinfo.value.valid_subgraphs == ["accounts", "products"]


def test_fetch_subgraph(graph_ref: GraphRef) -> None:
    response = FetchResponse(sdl=Sdl(contents=SDL, type=SdlType.SUBGRAPH, routing_url="http://x"))
    client = FakeStudioClient(fetch_subgraph=response)

    output = commands.fetch_subgraph(client, graph_ref, "accounts")

    assert output.fetch_response is response
    assert client.calls == [("fetch_subgraph", (graph_ref, "accounts"))]


def test_delete_subgraph_passes_dry_run(graph_ref: GraphRef) -> None:
    response = make_subgraph_delete().delete_response
    client = FakeStudioClient(delete_subgraph=response)

    output = commands.delete_subgraph(client, graph_ref, "subgraph", dry_run=True)

    assert output.dry_run is True
    assert client.calls == [("delete_subgraph", (graph_ref, "subgraph", True))]


def test_passing_check(graph_ref: GraphRef) -> None:
    client = FakeStudioClient(check_graph=make_check_response())

    output = commands.check_graph(client, graph_ref, SDL)

    assert isinstance(output, Check)


def test_failing_check_raises(graph_ref: GraphRef) -> None:
    client = FakeStudioClient(check_graph=make_check_response(failures=2))

    with pytest.raises(OperationCheckFailure) as excinfo:
        commands.check_graph(client, graph_ref, SDL)
    assert excinfo.value.check_response.failure_count == 2


def test_background_check_returns_workflow(graph_ref: GraphRef) -> None:
    queued = CheckRequestSuccessResult(workflow_id="abc", target_url="https://studio/checks/abc")
    client = FakeStudioClient(check_graph=queued)

    output = commands.check_graph(client, graph_ref, SDL, background=True)

    assert output == AsyncCheck(check_request=queued)
    assert client.calls[0][1][2] is True


def test_compose_returns_hints_by_default() -> None:
    composer = FakeComposer(CompositionOutput(supergraph_sdl=SDL))

    output = commands.compose_supergraph(composer, {"accounts": SDL})

    assert isinstance(output, CompositionResult)
    assert composer.received == {"accounts": SDL}


def test_compose_without_hints_returns_bare_schema() -> None:
    composer = FakeComposer(CompositionOutput(supergraph_sdl=SDL))

    output = commands.compose_supergraph(composer, {"accounts": SDL}, include_hints=False)

    assert output == SupergraphSchema(core_schema=SDL)


def test_compose_failure_propagates() -> None:
    composer = FakeComposer(BuildErrorsFailure(source=make_build_errors()))

    with pytest.raises(BuildErrorsFailure):
        commands.compose_supergraph(composer, {"accounts": SDL})


def test_read_subgraph_schemas(tmp_path: Path) -> None:
    schema = tmp_path / "accounts.graphql"
    schema.write_text(SDL, encoding="utf-8")

    assert commands.read_subgraph_schemas({"accounts": schema}) == {"accounts": SDL}

    with pytest.raises(UnclassifiedError, match="At least one subgraph"):
        commands.read_subgraph_schemas({})
    with pytest.raises(UnclassifiedError, match='subgraph "missing"'):
        commands.read_subgraph_schemas({"missing": tmp_path / "missing.graphql"})


def test_introspect_enriches_transport_failures() -> None:
    introspector = FakeIntrospector(ConnectionError("refused"))

    with pytest.raises(TransportError, match="introspecting http://localhost:4000"):
        commands.introspect(introspector, "http://localhost:4000", {})


def test_introspect_returns_response() -> None:
    introspector = FakeIntrospector(SDL)

    output = commands.introspect(introspector, "http://localhost:4000", {"x-token": "1"})

    assert output.introspection_response == SDL
    assert introspector.requests == [("http://localhost:4000", {"x-token": "1"})]


def test_readme_fetch_carries_timestamp(graph_ref: GraphRef) -> None:
    client = FakeStudioClient(fetch_readme=("# Hello", "2024-01-02"))

    output = commands.fetch_readme(client, graph_ref)

    assert output.content == "# Hello"
    assert output.last_updated_time == "2024-01-02"
