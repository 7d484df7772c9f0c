"""Live preview rendering.

:class:`TemplateRenderer` keeps a PyLaTeX ``Document`` in sync with a
:class:`~resume_editor.services.document.ResumeDocument`, re-rendering on
every snapshot and whenever the selected template changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from resume_editor.models.resume import ResumeData
from resume_editor.templates import DEFAULT_TEMPLATE, get_template, is_known_template

if TYPE_CHECKING:
    from pylatex import Document

    from resume_editor.services.document import ResumeDocument
    from resume_editor.templates.base import ResumeTemplate

logger = logging.getLogger(__name__)

__all__ = ["TemplateRenderer", "render"]


def render(data: ResumeData, template_id: str | None = DEFAULT_TEMPLATE) -> Document:
    """Project *data* through the template registered as *template_id*."""
    return get_template(template_id).build(data)


class TemplateRenderer:
    """Observer that holds the current preview for one document."""

    def __init__(
        self,
        document: ResumeDocument | None = None,
        template_id: str = DEFAULT_TEMPLATE,
    ) -> None:
        self._template_id = template_id if is_known_template(template_id) else DEFAULT_TEMPLATE
        self._data = ResumeData()
        self._preview: Document | None = None
        self._document: ResumeDocument | None = None
        self._unsubscribe: Callable[[], None] | None = None
        if document is not None:
            self.attach(document)

    @property
    def template_id(self) -> str:
        return self._template_id

    @property
    def template(self) -> ResumeTemplate:
        return get_template(self._template_id)

    @property
    def data(self) -> ResumeData:
        """The snapshot the current preview was built from."""
        return self._data

    @property
    def preview(self) -> Document:
        """The visual tree for the latest snapshot and selected template."""
        if self._preview is None:
            self._preview = self.render(self._data)
        return self._preview

    @property
    def document(self) -> ResumeDocument | None:
        return self._document

    def attach(self, document: ResumeDocument) -> None:
        if self._document is not None:
            self.detach()
        self._document = document
        self._unsubscribe = document.subscribe(self._on_change)
        self._on_change(document.snapshot)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._document = None
        self._unsubscribe = None

    def select(self, template_id: str) -> Document:
        """Switch templates and rebuild the preview from the current snapshot."""
        if not is_known_template(template_id):
            logger.debug("Unknown template %r, using %r", template_id, DEFAULT_TEMPLATE)
            template_id = DEFAULT_TEMPLATE
        self._template_id = template_id
        self._preview = self.render(self._data)
        return self._preview

    def render(self, data: ResumeData) -> Document:
        """Build a document for *data* with the selected template. No side effects."""
        return render(data, self._template_id)

    def _on_change(self, data: ResumeData) -> None:
        self._data = data
        self._preview = self.render(data)
