from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from resume_editor.models import DraftFormatError, ResumeEditorError
from resume_editor.services.document import ResumeDocument
from resume_editor.services.export_pipeline import ExportPipeline
from resume_editor.services.persistence import (
    list_drafts,
    load_draft_file,
    load_stored_draft,
    open_session,
    save_draft,
)
from resume_editor.services.profile_picture import attach_profile_picture
from resume_editor.services.renderer import TemplateRenderer
from resume_editor.services.validation import ensure_valid
from resume_editor.templates import DEFAULT_TEMPLATE, get_template, list_templates
from resume_editor.utils.export import render_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-editor",
        description="Edit, render and export the resume kept in the local store.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("show", help="Print the current resume as plain text")
    commands.add_parser("templates", help="List the available templates")
    commands.add_parser("check", help="Report fields that are missing or malformed")

    export = commands.add_parser("export", help="Export the resume")
    export.add_argument("format", choices=["txt", "pdf", "tex"])
    export.add_argument(
        "--template",
        default=DEFAULT_TEMPLATE,
        help=f"Template identifier (default: {DEFAULT_TEMPLATE})",
    )
    export.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output directory (default: RESUME_EXPORT_DIR or the current directory)",
    )
    export.add_argument(
        "--photo",
        type=Path,
        default=None,
        help="Profile picture to include (the auto-save does not keep pictures)",
    )

    draft = commands.add_parser("draft", help="Save or load drafts")
    draft_commands = draft.add_subparsers(dest="draft_command", required=True)
    save = draft_commands.add_parser("save", help="Save the resume as a new draft")
    save.add_argument("--dir", type=Path, default=None, help="Also write the draft file here")
    load = draft_commands.add_parser("load", help="Load a draft file or a stored draft name")
    load.add_argument("source")
    draft_commands.add_parser("list", help="List drafts saved to the store")

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse *argv* and run one command against the mirrored session.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    document, mirror = open_session()
    try:
        return _dispatch(args, document)
    except (ResumeEditorError, OSError) as exc:
        print(f"❌ Error: {exc}")
        return 1
    finally:
        mirror.detach()


def _dispatch(args: argparse.Namespace, document: ResumeDocument) -> int:
    if args.command == "show":
        print(render_text(document.snapshot), end="")
        return 0
    if args.command == "templates":
        return _show_templates()
    if args.command == "check":
        ensure_valid(document.snapshot)
        print("✅ Resume is complete")
        return 0
    if args.command == "export":
        if args.photo is not None and _photo_set(document, args.photo) != 0:
            return 1
        return _export(document, args.format, args.template, args.output)
    if args.command == "draft":
        return _draft(document, args)
    return 1


def _show_templates() -> int:
    for identifier in list_templates():
        marker = " (default)" if identifier == DEFAULT_TEMPLATE else ""
        print(f"{identifier:<10} {get_template(identifier).name}{marker}")
    return 0


def _export(document: ResumeDocument, fmt: str, template: str, output: Path | None) -> int:
    renderer = TemplateRenderer(document, template)
    pipeline = ExportPipeline(renderer)
    try:
        if fmt == "txt":
            path = pipeline.export_text(output)
        elif fmt == "tex":
            path = pipeline.export_tex(output)
        else:
            path = asyncio.run(pipeline.export_pdf(output))
    finally:
        renderer.detach()
    print(f"✅ Exported {path}")
    return 0


def _draft(document: ResumeDocument, args: argparse.Namespace) -> int:
    if args.draft_command == "save":
        saved = save_draft(document.snapshot, args.dir)
        print(f"✅ Saved draft {saved.name}")
        if saved.path is not None:
            print(f"   File: {saved.path}")
        return 0

    if args.draft_command == "list":
        names = list_drafts()
        if not names:
            print("No drafts saved.")
        for name in names:
            print(name)
        return 0

    source = Path(args.source)
    if source.is_file():
        asyncio.run(load_draft_file(document, source))
    else:
        data = load_stored_draft(args.source)
        if data is None:
            raise DraftFormatError(f"No draft file or stored draft named {args.source!r}")
        document.replace(data)
    print(f"✅ Loaded draft {args.source}")
    return 0


def _photo_set(document: ResumeDocument, path: Path) -> int:
    ok, message = asyncio.run(attach_profile_picture(document, path))
    if not ok:
        print(f"❌ {message}")
        return 1
    print(f"✅ Profile picture set from {path.name}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user. Exiting.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
