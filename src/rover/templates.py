"""
Template Catalog

Starter projects offered by ``rover template``. The catalog is static; a
TemplateFetcher materializes the chosen repository on disk.
"""

from __future__ import annotations

from .domain.errors import TemplateNotFound, UnclassifiedError
from .domain.models import GithubTemplate, ProjectLanguage

TEMPLATES: tuple[GithubTemplate, ...] = (
    GithubTemplate(
        id="subgraph-go-gqlgen",
        git_url="https://github.com/apollographql/subgraph-template-go-gqlgen-boilerplate",
        display="Go (gqlgen)",
        language=ProjectLanguage.GO,
    ),
    GithubTemplate(
        id="subgraph-java-spring-graphql",
        git_url="https://github.com/apollographql/subgraph-template-java-spring-graphql-boilerplate",
        display="Java (spring-graphql)",
        language=ProjectLanguage.JAVA,
    ),
    GithubTemplate(
        id="subgraph-javascript-apollo-server",
        git_url="https://github.com/apollographql/subgraph-template-javascript-apollo-server-boilerplate",
        display="JavaScript (Apollo Server)",
        language=ProjectLanguage.JAVASCRIPT,
    ),
    GithubTemplate(
        id="subgraph-python-strawberry-fastapi",
        git_url="https://github.com/strawberry-graphql/subgraph-template-strawberry-fastapi",
        display="Python (Strawberry with FastAPI)",
        language=ProjectLanguage.PYTHON,
    ),
    GithubTemplate(
        id="subgraph-python-ariadne-fastapi",
        git_url="https://github.com/mirumee/subgraph-template-ariadne-fastapi",
        display="Python (Ariadne with FastAPI)",
        language=ProjectLanguage.PYTHON,
    ),
    GithubTemplate(
        id="subgraph-rust-async-graphql",
        git_url="https://github.com/apollographql/subgraph-template-rust-async-graphql",
        display="Rust (async-graphql)",
        language=ProjectLanguage.RUST,
    ),
    GithubTemplate(
        id="subgraph-typescript-apollo-server",
        git_url="https://github.com/apollographql/subgraph-template-typescript-apollo-server-boilerplate",
        display="TypeScript (Apollo Server)",
        language=ProjectLanguage.TYPESCRIPT,
    ),
)


def list_templates(language: ProjectLanguage | None = None) -> tuple[GithubTemplate, ...]:
    """
    Return the catalog, optionally narrowed to one language.

    Raises:
        UnclassifiedError: If no template matches the filter
    """
    templates = tuple(t for t in TEMPLATES if language is None or t.language == language)
    if not templates:
        raise UnclassifiedError(text="No templates matched the provided filters")
    return templates


def get_template(template_id: str) -> GithubTemplate:
    """
    Look up a template by id.

    Raises:
        TemplateNotFound: If no template has ``template_id``
    """
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    raise TemplateNotFound(template_id=template_id)
