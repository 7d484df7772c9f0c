"""Services"""

from resume_editor.services.document import ResumeDocument
from resume_editor.services.export_pipeline import ExportPipeline
from resume_editor.services.persistence import (
    AutoMirror,
    load_draft,
    load_draft_file,
    load_mirror,
    open_session,
    save_draft,
)
from resume_editor.services.profile_picture import attach_profile_picture
from resume_editor.services.renderer import TemplateRenderer

__all__ = [
    "AutoMirror",
    "ExportPipeline",
    "ResumeDocument",
    "TemplateRenderer",
    "attach_profile_picture",
    "load_draft",
    "load_draft_file",
    "load_mirror",
    "open_session",
    "save_draft",
]
