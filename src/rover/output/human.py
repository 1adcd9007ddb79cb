"""
Human Renderer

Turns a command outcome into terminal text: an optional descriptor heading,
narration lines for side effects that already happened, and the body a
script would capture from stdout. Tables and markdown are drawn with rich
and exported as plain text so the body never carries styling.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table
from rich.text import Text

from rover.domain.codes import Severity
from rover.domain.errors import RoverError
from rover.domain.models import SdlType
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

from .machine import UnhandledOutputError

UNSPECIFIED_URL = "unspecified"
MISSING_VALUE = "N/A"
TABLE_WIDTH = 160

SEVERITY_PREFIXES: dict[Severity, tuple[str, str]] = {
    Severity.ERROR: ("error:", "bold red"),
    Severity.WARNING: ("WARN:", "bold yellow"),
    Severity.HINT: ("HINT:", "bold cyan"),
}


@dataclass(slots=True, frozen=True)
class HumanReport:
    """Terminal rendering of one result."""

    descriptor: str | None = None
    status_lines: tuple[Text, ...] = field(default_factory=tuple)
    body: str | None = None
    inline_descriptor: bool = False
    advisory_lines: tuple[Text, ...] = field(default_factory=tuple)

    def status_text(self) -> list[str]:
        """Status lines without styling."""
        return [line.plain for line in self.status_lines]

    def advisory_text(self) -> list[str]:
        """Build error advisories without styling."""
        return [line.plain for line in self.advisory_lines]


def prefixed(severity: Severity, message: str) -> Text:
    """Return ``message`` behind the styled prefix for ``severity``."""
    prefix, style = SEVERITY_PREFIXES[severity]
    return Text.assemble((prefix, style), " ", message)


def _render_to_text(renderable: Any, width: int = TABLE_WIDTH) -> str:
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None, highlight=False)
    console.print(renderable)
    lines = [line.rstrip() for line in buffer.getvalue().splitlines()]
    return "\n".join(lines).strip("\n")


def _natural_width(columns: list[str], rows: list[list[str]]) -> int:
    # padding either side of each cell plus one border per column and the closing one
    cells = [
        max([len(column), *(len(row[index]) for row in rows)])
        for index, column in enumerate(columns)
    ]
    return sum(width + 3 for width in cells) + 1


def render_table(columns: list[str], rows: list[list[str]]) -> str:
    """
    Draw a table as plain text.

    The export console is widened to fit the longest row, so no cell is ever
    wrapped and values such as routing URLs stay on one line.
    """
    table = Table(show_header=True, header_style="bold")
    for column in columns:
        table.add_column(column, justify="left", no_wrap=True)
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))
    return _render_to_text(table, width=max(TABLE_WIDTH, _natural_width(columns, rows)))


def _studio_url(root_url: str, path: str) -> str:
    return f"{root_url.rstrip('/')}/{path.lstrip('/')}"


def _contract_describe(output: ContractDescribe) -> HumanReport:
    response = output.describe_response
    config_url = _studio_url(
        response.root_url,
        f"graph/{response.graph_ref.name}/settings/variant?variant={response.graph_ref.variant}",
    )
    return HumanReport(
        descriptor="Configuration Description",
        body=f"{response.description}\nView the variant's full configuration at {config_url}",
    )


def _contract_publish(output: ContractPublish) -> HumanReport:
    response = output.publish_response
    launch_copy = response.launch_cli_copy or "No launch was triggered for this publish."
    return HumanReport(
        descriptor="New Configuration Description",
        body=f"{response.config_description}\n{launch_copy}",
    )


def _docs_list(output: DocsList) -> HumanReport:
    rows = [[slug, description] for slug, description in sorted(output.shortlinks.items())]
    return HumanReport(
        status_lines=(
            Text(
                "You can open any of these documentation pages by running "
                "`rover docs open <slug>`."
            ),
        ),
        body=render_table(["Slug", "Description"], rows),
    )


def _fetch(output: Fetch) -> HumanReport:
    sdl = output.fetch_response.sdl
    descriptor = "Supergraph Schema" if sdl.type == SdlType.SUPERGRAPH else "Schema"
    return HumanReport(descriptor=descriptor, body=sdl.contents)


def _supergraph_schema(output: SupergraphSchema) -> HumanReport:
    return HumanReport(descriptor="Supergraph Schema", body=output.core_schema)


def _composition_result(output: CompositionResult) -> HumanReport:
    composition = output.composition_output
    hints = tuple(prefixed(Severity.HINT, hint.message) for hint in composition.hints)
    return HumanReport(
        descriptor="Supergraph Schema", status_lines=hints, body=composition.supergraph_sdl
    )


def _subgraph_list(output: SubgraphList) -> HumanReport:
    details = output.list_response
    rows = []
    for subgraph in details.subgraphs:
        url = subgraph.url or UNSPECIFIED_URL
        local = subgraph.updated_at.local
        updated = local.strftime("%Y-%m-%d %H:%M:%S %Z").strip() if local else MISSING_VALUE
        rows.append([subgraph.name, url, updated])
    table = render_table(["Name", "Routing Url", "Last Updated"], rows)
    details_url = _studio_url(details.root_url, f"graph/{details.graph_ref.name}/service-list")
    return HumanReport(body=f"{table}\nView full details at {details_url}")


def check_table(output: Check) -> str:
    """Render the change list of a check."""
    response = output.check_response
    lines = [
        f"Compared {len(response.changes)} schema changes against "
        f"{response.operation_check_count} operations"
    ]
    if response.changes:
        rows = [
            [str(change.severity), change.code, change.description] for change in response.changes
        ]
        lines.append(render_table(["Change", "Code", "Description"], rows))
    else:
        lines.append("There were no changes detected in the composed schema.")
    if response.target_url:
        lines.append(f"View full details at {response.target_url}")
    return "\n".join(lines)


def _check(output: Check) -> HumanReport:
    return HumanReport(descriptor="Check Result", body=check_table(output))


def _async_check(output: AsyncCheck) -> HumanReport:
    request = output.check_request
    return HumanReport(
        descriptor="Check Started",
        body=(
            f"Check successfully started with workflow ID: {request.workflow_id}\n"
            f"View full details at {request.target_url}"
        ),
    )


def _graph_publish(output: GraphPublish) -> HumanReport:
    response = output.publish_response
    return HumanReport(
        descriptor="Schema Hash",
        inline_descriptor=True,
        status_lines=(
            Text(
                f"{output.graph_ref}#{response.api_schema_hash} published successfully "
                f"{response.change_summary}"
            ),
        ),
        body=response.api_schema_hash,
    )


def _subgraph_publish(output: SubgraphPublish) -> HumanReport:
    response = output.publish_response
    graph_ref = output.graph_ref
    subgraph = output.subgraph
    lines: list[Text] = []
    if response.subgraph_was_created:
        lines.append(Text(f"A new subgraph called '{subgraph}' was created in '{graph_ref}'"))
    else:
        lines.append(Text(f"The '{subgraph}' subgraph in '{graph_ref}' was updated"))

    if response.supergraph_was_updated:
        lines.append(
            Text(
                f"The supergraph schema for '{graph_ref}' was updated, composed from the "
                f"updated '{subgraph}' subgraph"
            )
        )
    else:
        lines.append(
            Text(f"The supergraph schema for '{graph_ref}' was NOT updated with a new schema")
        )

    if response.launch_cli_copy:
        lines.append(Text(response.launch_cli_copy))

    advisory = companion_error(output)
    warnings: list[Text] = []
    if advisory is not None:
        warnings.append(prefixed(Severity.WARNING, "The following build errors occurred:"))
        warnings.extend(error_items(advisory, severity=Severity.WARNING))
    return HumanReport(status_lines=tuple(lines), advisory_lines=tuple(warnings))


def _subgraph_delete(output: SubgraphDelete) -> HumanReport:
    response = output.delete_response
    graph_ref = output.graph_ref
    subgraph = output.subgraph
    advisory = companion_error(output)
    lines: list[Text] = []
    warnings: list[Text] = []
    if output.dry_run:
        if advisory is not None:
            warnings.append(
                prefixed(
                    Severity.WARNING,
                    f"Deleting the {subgraph} subgraph from {graph_ref} would result in the "
                    "following build errors:",
                )
            )
            warnings.extend(error_items(advisory, severity=Severity.WARNING))
            warnings.append(
                prefixed(
                    Severity.WARNING,
                    "This is only a prediction. If the graph changes before confirming, "
                    "these errors could change.",
                )
            )
        else:
            lines.append(
                prefixed(
                    Severity.WARNING,
                    "At the time of checking, there would be no build errors resulting from "
                    "the deletion of this subgraph.",
                )
            )
            lines.append(
                prefixed(
                    Severity.WARNING,
                    "This is only a prediction. If the graph changes before confirming, "
                    "there could be build errors.",
                )
            )
        return HumanReport(status_lines=tuple(lines), advisory_lines=tuple(warnings))

    if response.supergraph_was_updated:
        lines.append(
            Text(
                f"The '{subgraph}' subgraph was removed from '{graph_ref}'. "
                "The remaining subgraphs were composed."
            )
        )
    else:
        lines.append(
            prefixed(
                Severity.WARNING,
                f"The supergraph schema for '{graph_ref}' was not updated. See errors below.",
            )
        )
    if advisory is not None:
        warnings.append(
            prefixed(
                Severity.WARNING,
                f"There were build errors as a result of deleting the '{subgraph}' subgraph "
                f"from '{graph_ref}':",
            )
        )
        warnings.extend(error_items(advisory, severity=Severity.WARNING))
    return HumanReport(status_lines=tuple(lines), advisory_lines=tuple(warnings))


def _template_list(output: TemplateList) -> HumanReport:
    rows = [
        [template.display, template.id, str(template.language), template.git_url]
        for template in output.templates
    ]
    return HumanReport(body=render_table(["Name", "ID", "Language", "Repo URL"], rows))


def _template_use(output: TemplateUseSuccess) -> HumanReport:
    return HumanReport(
        descriptor="Project generated",
        body=(
            f"Successfully created a new project from the '{output.template.id}' template "
            f"in {output.path}\nRead the generated 'README.md' file for next steps."
        ),
    )


def _profiles(output: Profiles) -> HumanReport:
    lines = () if output.profiles else (Text("No profiles found."),)
    return HumanReport(
        descriptor="Profiles", status_lines=lines, body="\n".join(output.profiles)
    )


def _introspection(output: Introspection) -> HumanReport:
    return HumanReport(descriptor="Introspection Response", body=output.introspection_response)


def _error_explanation(output: ErrorExplanation) -> HumanReport:
    return HumanReport(body=_render_to_text(Markdown(output.explanation_markdown)))


def _readme_fetch(output: ReadmeFetch) -> HumanReport:
    return HumanReport(descriptor="Readme", body=output.content)


def _readme_publish(output: ReadmePublish) -> HumanReport:
    return HumanReport(
        status_lines=(Text(f"Readme for {output.graph_ref} published successfully"),)
    )


def _empty_success(_output: EmptySuccess) -> HumanReport:
    return HumanReport()


_HUMAN_RENDERERS: dict[type[RoverOutput], Callable[[Any], HumanReport]] = {
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

ensure_exhaustive(_HUMAN_RENDERERS, "human renderer")


def render_human(output: RoverOutput) -> HumanReport:
    """Render a successful outcome for the terminal."""
    renderer = _HUMAN_RENDERERS.get(type(output))
    if renderer is None:
        raise UnhandledOutputError(f"No terminal rendering for {type(output).__name__}")
    return renderer(output)


def error_items(error: RoverError, *, severity: Severity | None = None) -> list[Text]:
    """
    Itemized follow-on lines for ``error``.

    The prefix comes from the kind's item severity in the shared code table
    unless ``severity`` overrides it (advisory build errors render as warnings).
    """
    item_severity = severity or error.item_severity
    return [prefixed(item_severity, item) for item in error.items()]


def render_human_error(error: RoverError) -> list[Text]:
    """Render a failure: one message line, then any itemized details."""
    prefix, style = SEVERITY_PREFIXES[Severity.ERROR]
    if error.code:
        prefix = f"{prefix[:-1]}[{error.code}]:"
    headline = Text.assemble((prefix, style), " ", error.message)
    return [headline, *error_items(error)]
