"""
Machine Renderer

Maps a command outcome to the versioned JSON envelope. Each RoverOutput
variant has exactly one entry in _DATA_BUILDERS; the module refuses to import
when a variant is missing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from rover.domain.errors import RoverError
from rover.domain.results import (
    AsyncCheck,
    Check,
    CompositionResult,
    ContractDescribe,
    ContractPublish,
    DocsList,
    EmptySuccess,
    ErrorExplanation,
    Fetch,
    GraphPublish,
    Introspection,
    Profiles,
    ReadmeFetch,
    ReadmePublish,
    RoverOutput,
    SubgraphDelete,
    SubgraphList,
    SubgraphPublish,
    SupergraphSchema,
    TemplateList,
    TemplateUseSuccess,
    companion_error,
    ensure_exhaustive,
)

from .envelope import JsonError, JsonOutput, build_error_envelope, build_success_envelope

logger = logging.getLogger(__name__)


class UnhandledOutputError(TypeError):
    """Raised when a result type has no rendering entry."""


def _contract_describe(output: ContractDescribe) -> dict[str, Any]:
    response = output.describe_response
    return {
        "description": response.description,
        "root_url": response.root_url,
        "graph_ref": str(response.graph_ref),
    }


def _contract_publish(output: ContractPublish) -> dict[str, Any]:
    return output.publish_response.model_dump(mode="json")


def _docs_list(output: DocsList) -> dict[str, Any]:
    shortlinks = [
        {"slug": slug, "description": description}
        for slug, description in sorted(output.shortlinks.items())
    ]
    return {"shortlinks": shortlinks}


def _fetch(output: Fetch) -> dict[str, Any]:
    return {"sdl": {"contents": output.fetch_response.sdl.contents}}


def _supergraph_schema(output: SupergraphSchema) -> dict[str, Any]:
    return {"core_schema": output.core_schema}


def _composition_result(output: CompositionResult) -> dict[str, Any]:
    composition = output.composition_output
    payload: dict[str, Any] = {
        "core_schema": composition.supergraph_sdl,
        "hints": [hint.model_dump(mode="json") for hint in composition.hints],
    }
    if composition.federation_version is not None:
        payload["federation_version"] = composition.federation_version
    return payload


def _subgraph_list(output: SubgraphList) -> dict[str, Any]:
    return {
        "subgraphs": [
            subgraph.model_dump(mode="json") for subgraph in output.list_response.subgraphs
        ]
    }


def _check(output: Check) -> dict[str, Any]:
    return output.check_response.get_json()


def _async_check(output: AsyncCheck) -> dict[str, Any]:
    return output.check_request.get_json()


def _graph_publish(output: GraphPublish) -> dict[str, Any]:
    response = output.publish_response
    return {
        "api_schema_hash": response.api_schema_hash,
        "field_changes": response.change_summary.field_changes.model_dump(),
        "type_changes": response.change_summary.type_changes.model_dump(),
    }


def _subgraph_publish(output: SubgraphPublish) -> dict[str, Any]:
    # build errors travel in the envelope's error object, not in data
    return output.publish_response.model_dump(mode="json", exclude={"build_errors"})


def _subgraph_delete(output: SubgraphDelete) -> dict[str, Any]:
    return {"supergraph_was_updated": output.delete_response.supergraph_was_updated}


def _template_list(output: TemplateList) -> dict[str, Any]:
    return {"templates": [template.model_dump(mode="json") for template in output.templates]}


def _template_use(output: TemplateUseSuccess) -> dict[str, Any]:
    return {"template_id": output.template.id, "path": str(output.path)}


def _profiles(output: Profiles) -> dict[str, Any]:
    return {"profiles": list(output.profiles)}


def _introspection(output: Introspection) -> dict[str, Any]:
    return {"introspection_response": output.introspection_response}


def _error_explanation(output: ErrorExplanation) -> dict[str, Any]:
    return {"explanation_markdown": output.explanation_markdown}


def _readme_fetch(output: ReadmeFetch) -> dict[str, Any]:
    return {"readme": output.content, "last_updated_time": output.last_updated_time}


def _readme_publish(output: ReadmePublish) -> dict[str, Any]:
    return {"readme": output.new_content, "last_updated_time": output.last_updated_time}


def _empty_success(_output: EmptySuccess) -> dict[str, Any]:
    return {}


_DATA_BUILDERS: dict[type[RoverOutput], Callable[[Any], dict[str, Any]]] = {
    ContractDescribe: _contract_describe,
    ContractPublish: _contract_publish,
    DocsList: _docs_list,
    Fetch: _fetch,
    SupergraphSchema: _supergraph_schema,
    CompositionResult: _composition_result,
    SubgraphList: _subgraph_list,
    Check: _check,
    AsyncCheck: _async_check,
    GraphPublish: _graph_publish,
    SubgraphPublish: _subgraph_publish,
    SubgraphDelete: _subgraph_delete,
    TemplateList: _template_list,
    TemplateUseSuccess: _template_use,
    Profiles: _profiles,
    Introspection: _introspection,
    ErrorExplanation: _error_explanation,
    ReadmeFetch: _readme_fetch,
    ReadmePublish: _readme_publish,
    EmptySuccess: _empty_success,
}


ensure_exhaustive(_DATA_BUILDERS, "machine renderer")


def error_to_json(error: RoverError) -> JsonError:
    """Map a RoverError to the envelope error object via the shared code table."""
    return JsonError(message=error.message, code=error.code, details=error.details())


def render_data(output: RoverOutput) -> dict[str, Any]:
    """Return the variant fields of ``output`` (without ``success``)."""
    builder = _DATA_BUILDERS.get(type(output))
    if builder is None:
        raise UnhandledOutputError(f"No JSON mapping for {type(output).__name__}")
    return builder(output)


def render_machine(outcome: RoverOutput | RoverError) -> JsonOutput:
    """Render a command outcome as the versioned JSON envelope."""
    if isinstance(outcome, RoverError):
        logger.debug("Rendering %s (%s) as JSON", type(outcome).__name__, outcome.code)
        return build_error_envelope(error=error_to_json(outcome), fields=outcome.data())

    fields = render_data(outcome)
    advisory = companion_error(outcome)
    if advisory is not None:
        logger.debug("%s carries %d build errors", type(outcome).__name__, len(advisory.source))
        return build_success_envelope(fields=fields, error=error_to_json(advisory))
    return build_success_envelope(fields=fields)
