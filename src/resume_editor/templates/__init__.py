"""Template registry for resume rendering."""

from __future__ import annotations

import logging

from resume_editor.templates.base import ResumeTemplate
from resume_editor.templates.classic import ClassicResumeTemplate
from resume_editor.templates.creative import CreativeResumeTemplate
from resume_editor.templates.modern import ModernResumeTemplate

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_TEMPLATE",
    "ResumeTemplate",
    "get_template",
    "is_known_template",
    "list_templates",
]

DEFAULT_TEMPLATE = "modern"

_REGISTRY: dict[str, ResumeTemplate] = {
    "modern": ModernResumeTemplate(),
    "classic": ClassicResumeTemplate(),
    "creative": CreativeResumeTemplate(),
}


def get_template(name: str | None) -> ResumeTemplate:
    """Return the template registered under *name*.

    Unknown names resolve to the modern template.
    """
    template = _REGISTRY.get(name or "")
    if template is None:
        logger.debug("Unknown template %r, using %r", name, DEFAULT_TEMPLATE)
        return _REGISTRY[DEFAULT_TEMPLATE]
    return template


def is_known_template(name: str | None) -> bool:
    return (name or "") in _REGISTRY


def list_templates() -> list[str]:
    """Return sorted names of all registered templates."""
    return sorted(_REGISTRY)
