"""
Click-based CLI for Rover.

Every command parses its arguments, builds a handler closure over the
collaborators in the AppContext and hands it to the dispatcher. Rendering and
exit codes are the dispatcher's job.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import click

from . import __version__, commands
from .config import (
    CONFIG_HOME_ENV,
    FORMAT_ENV,
    LOG_ENV,
    LogLevel,
    OutputFormat,
    Settings,
)
from .context import DEFAULT_PROFILE, AppContext
from .domain.models import GraphRef, ProjectLanguage
from .domain.results import EmptySuccess, RoverOutput
from .logs import configure_logging

logger = logging.getLogger(__name__)

profile_option = click.option(
    "--profile",
    default=DEFAULT_PROFILE,
    show_default=True,
    help="Name of the configuration profile to authenticate with",
)


def _app(ctx: click.Context) -> AppContext:
    app = ctx.find_object(AppContext)
    if app is None:
        raise click.UsageError("rover was invoked without an application context")
    return app


def _dispatch(ctx: click.Context, handler: Callable[[], RoverOutput]) -> None:
    ctx.exit(_app(ctx).dispatcher.run(handler))


def _parse_headers(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    headers: dict[str, str] = {}
    for value in values:
        name, sep, header_value = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"'{value}' is not in the format 'Name: Value'")
        headers[name.strip()] = header_value.strip()
    return headers


def _parse_subgraph_sources(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, Path]:
    sources: dict[str, Path] = {}
    for value in values:
        name, sep, path = value.partition("=")
        if not sep or not name.strip() or not path.strip():
            raise click.BadParameter(f"'{value}' is not in the format 'NAME=PATH'")
        sources[name.strip()] = Path(path.strip())
    return sources


@click.group()
@click.version_option(version=__version__, prog_name="rover")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.PLAIN.value,
    show_default=True,
    envvar=FORMAT_ENV,
    help="Render results as plain text or as a JSON envelope",
)
@click.option(
    "--log",
    "log_level",
    type=click.Choice([level.value for level in LogLevel]),
    default=None,
    envvar=LOG_ENV,
    help="Log verbosity (logs are written to stderr)",
)
@click.option(
    "--config-home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar=CONFIG_HOME_ENV,
    help="Directory holding rover profiles",
)
@click.pass_context
def cli(
    ctx: click.Context, output_format: str, log_level: str | None, config_home: Path | None
) -> None:
    """Rover CLI for the Apollo graph registry"""
    overrides = {"config_home": config_home} if config_home is not None else {}
    settings = Settings(
        output_format=OutputFormat(output_format),
        log_level=LogLevel(log_level) if log_level else None,
        **overrides,
    )
    configure_logging(settings.log_level)
    logger.debug("Resolved settings: %s", settings)

    if isinstance(ctx.obj, AppContext):
        ctx.obj.apply_settings(settings)
    else:
        ctx.obj = AppContext.from_settings(settings)


# docs


@cli.group()
def docs() -> None:
    """Browse Rover's documentation"""


@docs.command("list")
@click.pass_context
def docs_list(ctx: click.Context) -> None:
    """List the available documentation shortlinks"""
    _dispatch(ctx, commands.list_docs)


@docs.command("open")
@click.argument("slug")
@click.pass_context
def docs_open(ctx: click.Context, slug: str) -> None:
    """Open a documentation page in the browser"""
    _dispatch(ctx, lambda: commands.open_docs(slug))


@cli.command()
@click.argument("code")
@click.pass_context
def explain(ctx: click.Context, code: str) -> None:
    """Explain an error code"""
    _dispatch(ctx, lambda: commands.explain(code))


# profile


@cli.group()
def profile() -> None:
    """Manage configuration profiles"""


@profile.command("list")
@click.pass_context
def profile_list(ctx: click.Context) -> None:
    """List stored profiles"""
    app = _app(ctx)
    _dispatch(ctx, lambda: commands.list_profiles(app.profile_store))


@profile.command("auth")
@click.argument("name", default=DEFAULT_PROFILE)
@click.pass_context
def profile_auth(ctx: click.Context, name: str) -> None:
    """Store an API key for a profile"""
    app = _app(ctx)
    api_key = click.prompt("Paste your API key", hide_input=True, err=True)
    _dispatch(ctx, lambda: commands.save_profile(app.profile_store, name, api_key))


# template


@cli.group()
def template() -> None:
    """Create new projects from starter templates"""


@template.command("list")
@click.option(
    "--language",
    type=click.Choice([language.value for language in ProjectLanguage]),
    default=None,
    help="Only list templates for this language",
)
@click.pass_context
def template_list(ctx: click.Context, language: str | None) -> None:
    """List available templates"""
    selected = ProjectLanguage(language) if language else None
    _dispatch(ctx, lambda: commands.list_template_catalog(selected))


@template.command("use")
@click.argument("template_id")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def template_use(ctx: click.Context, template_id: str, path: Path) -> None:
    """Create a project from a template"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.use_template(app.require_template_fetcher(), template_id, path),
    )


# graph


@cli.group()
def graph() -> None:
    """Work with non-federated graphs"""


@graph.command("fetch")
@click.argument("graph_ref")
@profile_option
@click.pass_context
def graph_fetch(ctx: click.Context, graph_ref: str, profile: str) -> None:
    """Fetch a graph's schema"""
    app = _app(ctx)
    _dispatch(ctx, lambda: commands.fetch_graph(app.client(profile), GraphRef.parse(graph_ref)))


@graph.command("publish")
@click.argument("graph_ref")
@click.option("--schema", "schema_file", type=click.File("r", encoding="utf-8"), required=True,
              help="SDL file to publish ('-' reads stdin)")
@profile_option
@click.pass_context
def graph_publish(ctx: click.Context, graph_ref: str, schema_file, profile: str) -> None:
    """Publish a graph's schema"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.publish_graph(
            app.client(profile), GraphRef.parse(graph_ref), schema_file.read()
        ),
    )


@graph.command("check")
@click.argument("graph_ref")
@click.option("--schema", "schema_file", type=click.File("r", encoding="utf-8"), required=True,
              help="SDL file to check ('-' reads stdin)")
@click.option("--background", is_flag=True, help="Queue the check and return immediately")
@profile_option
@click.pass_context
def graph_check(
    ctx: click.Context, graph_ref: str, schema_file, background: bool, profile: str
) -> None:
    """Check a proposed schema against recent operations"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.check_graph(
            app.client(profile),
            GraphRef.parse(graph_ref),
            schema_file.read(),
            background=background,
        ),
    )


@graph.command("introspect")
@click.argument("endpoint")
@click.option("--header", "-H", "headers", multiple=True, callback=_parse_headers,
              help="Request header as 'Name: Value' (repeatable)")
@click.pass_context
def graph_introspect(ctx: click.Context, endpoint: str, headers: dict[str, str]) -> None:
    """Introspect a running GraphQL server"""
    app = _app(ctx)
    _dispatch(ctx, lambda: commands.introspect(app.require_introspector(), endpoint, headers))


# subgraph


@cli.group()
def subgraph() -> None:
    """Work with subgraphs of a federated graph"""


@subgraph.command("list")
@click.argument("graph_ref")
@profile_option
@click.pass_context
def subgraph_list(ctx: click.Context, graph_ref: str, profile: str) -> None:
    """List the subgraphs of a graph"""
    app = _app(ctx)
    _dispatch(
        ctx, lambda: commands.list_subgraphs(app.client(profile), GraphRef.parse(graph_ref))
    )


@subgraph.command("fetch")
@click.argument("graph_ref")
@click.option("--name", "subgraph_name", required=True, help="Name of the subgraph")
@profile_option
@click.pass_context
def subgraph_fetch(ctx: click.Context, graph_ref: str, subgraph_name: str, profile: str) -> None:
    """Fetch a subgraph's schema"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.fetch_subgraph(
            app.client(profile), GraphRef.parse(graph_ref), subgraph_name
        ),
    )


@subgraph.command("publish")
@click.argument("graph_ref")
@click.option("--name", "subgraph_name", required=True, help="Name of the subgraph")
@click.option("--schema", "schema_file", type=click.File("r", encoding="utf-8"), required=True,
              help="SDL file to publish ('-' reads stdin)")
@click.option("--routing-url", default=None, help="URL the router uses to reach the subgraph")
@profile_option
@click.pass_context
def subgraph_publish(
    ctx: click.Context,
    graph_ref: str,
    subgraph_name: str,
    schema_file,
    routing_url: str | None,
    profile: str,
) -> None:
    """Publish a subgraph's schema"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.publish_subgraph(
            app.client(profile),
            GraphRef.parse(graph_ref),
            subgraph_name,
            schema_file.read(),
            routing_url,
        ),
    )


@subgraph.command("delete")
@click.argument("graph_ref")
@click.option("--name", "subgraph_name", required=True, help="Name of the subgraph")
@click.option("--confirm", is_flag=True, help="Delete without previewing and prompting first")
@profile_option
@click.pass_context
def subgraph_delete(
    ctx: click.Context, graph_ref: str, subgraph_name: str, confirm: bool, profile: str
) -> None:
    """Delete a subgraph from a graph"""
    app = _app(ctx)

    def delete(dry_run: bool) -> RoverOutput:
        return commands.delete_subgraph(
            app.client(profile), GraphRef.parse(graph_ref), subgraph_name, dry_run=dry_run
        )

    if not confirm:
        # JSON output carries a single envelope, so the preview is only shown as text
        code = app.dispatcher.run(
            lambda: delete(True), emit_success=not app.settings.json_output
        )
        if code != 0:
            ctx.exit(code)
        if not click.confirm("Would you like to continue?", err=True):
            logger.info("Deletion of subgraph %s was cancelled", subgraph_name)
            ctx.exit(app.dispatcher.emit(EmptySuccess()))
    _dispatch(ctx, lambda: delete(False))


@subgraph.command("introspect")
@click.argument("endpoint")
@click.option("--header", "-H", "headers", multiple=True, callback=_parse_headers,
              help="Request header as 'Name: Value' (repeatable)")
@click.pass_context
def subgraph_introspect(ctx: click.Context, endpoint: str, headers: dict[str, str]) -> None:
    """Introspect a running subgraph server"""
    app = _app(ctx)
    _dispatch(ctx, lambda: commands.introspect(app.require_introspector(), endpoint, headers))


# supergraph


@cli.group()
def supergraph() -> None:
    """Work with composed supergraphs"""


@supergraph.command("fetch")
@click.argument("graph_ref")
@profile_option
@click.pass_context
def supergraph_fetch(ctx: click.Context, graph_ref: str, profile: str) -> None:
    """Fetch the latest composed supergraph schema"""
    app = _app(ctx)
    _dispatch(
        ctx, lambda: commands.fetch_supergraph(app.client(profile), GraphRef.parse(graph_ref))
    )


@supergraph.command("compose")
@click.option("--subgraph", "sources", multiple=True, callback=_parse_subgraph_sources,
              help="Subgraph schema as NAME=PATH (repeatable)")
@click.option("--skip-hints", is_flag=True, help="Print only the composed schema")
@click.pass_context
def supergraph_compose(ctx: click.Context, sources: dict[str, Path], skip_hints: bool) -> None:
    """Compose local subgraph schemas into a supergraph"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.compose_supergraph(
            app.require_composer(),
            commands.read_subgraph_schemas(sources),
            include_hints=not skip_hints,
        ),
    )


# readme


@cli.group()
def readme() -> None:
    """Work with graph variant readmes"""


@readme.command("fetch")
@click.argument("graph_ref")
@profile_option
@click.pass_context
def readme_fetch(ctx: click.Context, graph_ref: str, profile: str) -> None:
    """Fetch a variant's readme"""
    app = _app(ctx)
    _dispatch(ctx, lambda: commands.fetch_readme(app.client(profile), GraphRef.parse(graph_ref)))


@readme.command("publish")
@click.argument("graph_ref")
@click.option("--file", "readme_file", type=click.File("r", encoding="utf-8"), required=True,
              help="Markdown file to publish ('-' reads stdin)")
@profile_option
@click.pass_context
def readme_publish(ctx: click.Context, graph_ref: str, readme_file, profile: str) -> None:
    """Publish a variant's readme"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.publish_readme(
            app.client(profile), GraphRef.parse(graph_ref), readme_file.read()
        ),
    )


# contract


@cli.group()
def contract() -> None:
    """Work with contract variants"""


@contract.command("describe")
@click.argument("graph_ref")
@profile_option
@click.pass_context
def contract_describe(ctx: click.Context, graph_ref: str, profile: str) -> None:
    """Describe a contract's configuration"""
    app = _app(ctx)
    _dispatch(
        ctx, lambda: commands.describe_contract(app.client(profile), GraphRef.parse(graph_ref))
    )


@contract.command("publish")
@click.argument("graph_ref")
@click.option("--source-variant", required=True, help="Variant the contract filters")
@click.option("--include-tag", "include_tags", multiple=True, help="Tag to include (repeatable)")
@click.option("--exclude-tag", "exclude_tags", multiple=True, help="Tag to exclude (repeatable)")
@profile_option
@click.pass_context
def contract_publish(
    ctx: click.Context,
    graph_ref: str,
    source_variant: str,
    include_tags: tuple[str, ...],
    exclude_tags: tuple[str, ...],
    profile: str,
) -> None:
    """Publish a contract configuration"""
    app = _app(ctx)
    _dispatch(
        ctx,
        lambda: commands.publish_contract(
            app.client(profile),
            GraphRef.parse(graph_ref),
            source_variant,
            list(include_tags),
            list(exclude_tags),
        ),
    )


def main() -> None:
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
