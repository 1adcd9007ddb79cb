"""
Template Commands

Browse the starter project catalog and create a project from one entry.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rover.domain.errors import UnclassifiedError
from rover.domain.models import ProjectLanguage
from rover.domain.ports import TemplateFetcher
from rover.domain.results import TemplateList, TemplateUseSuccess
from rover.templates import get_template, list_templates

logger = logging.getLogger(__name__)


def list_template_catalog(language: ProjectLanguage | None = None) -> TemplateList:
    """
    List templates, optionally for a single language.

    Raises:
        UnclassifiedError: If the filter matches nothing
    """
    return TemplateList(templates=list_templates(language))


def use_template(fetcher: TemplateFetcher, template_id: str, path: Path) -> TemplateUseSuccess:
    """
    Materialize a template into ``path``.

    Args:
        fetcher: Collaborator that downloads the template repository
        template_id: Catalog id of the template
        path: Target directory; must be missing or empty

    Returns:
        TemplateUseSuccess naming the template and the directory

    Raises:
        TemplateNotFound: If ``template_id`` is not in the catalog
        UnclassifiedError: If ``path`` exists and is not an empty directory
    """
    template = get_template(template_id)
    if path.exists() and (not path.is_dir() or any(path.iterdir())):
        raise UnclassifiedError(
            text=f"Cannot create a new project because {path} already exists and is not empty"
        )
    logger.debug("Fetching template %s from %s into %s", template.id, template.git_url, path)
    fetcher.fetch(template, path)
    return TemplateUseSuccess(template=template, path=path)
