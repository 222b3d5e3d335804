"""
Command-line interface for Caselib Bundle.

Usage:
    caselib-bundle init a.pdf b.pdf --output project.json
    caselib-bundle export project.json --files-dir ./docs --output-dir ./out
    caselib-bundle info project.json
    caselib-bundle version
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.markup import escape
from rich.table import Table

from .assembler import BundleAssembler
from .config import ExportOptions
from .exceptions import BundleError
from .export import write_bundle
from .models.collection import append_annexes, create_annex
from .models.document import display_title
from .project import DEFAULT_PROJECT_FILENAME, ProjectModel, attach_files, load_project, save_project
from .stats import bundle_stats, format_bytes
from .utils.logger import add_file_handler
from .utils.rich_logger import console, failure, setup_rich_logging, success


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="caselib-bundle",
        description="Caselib Bundle - assemble numbered annex bundles into one PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  caselib-bundle init cerere.pdf contract.pdf -o project.json
  caselib-bundle export project.json --files-dir ./documente --output-dir ./out
  caselib-bundle info project.json
        """,
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file (rotated at 10 MB)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Create a project with one annex per PDF")
    init_parser.add_argument("files", nargs="+", help="PDF files, in annex order")
    init_parser.add_argument(
        "-o", "--output",
        default=DEFAULT_PROJECT_FILENAME,
        help=f"Project file to write (default: {DEFAULT_PROJECT_FILENAME})",
    )

    export_parser = subparsers.add_parser("export", help="Assemble a project into one PDF")
    export_parser.add_argument("project", help="Project JSON file")
    export_parser.add_argument(
        "--files-dir",
        help="Directory holding the documents (default: the project file's directory)",
    )
    export_parser.add_argument("--output-dir", default=".", help="Directory for the bundle (default: .)")
    export_parser.add_argument("--font-regular", help="TrueType file for body text")
    export_parser.add_argument("--font-bold", help="TrueType file for headings")
    export_parser.add_argument(
        "--keep-diacritics",
        action="store_true",
        help="Draw text as-is instead of replacing Romanian diacritics",
    )
    export_parser.add_argument("--no-stamp", action="store_true", help="Ignore the stamp settings")
    export_parser.add_argument("--strict", action="store_true", help="Parse documents in strict mode")

    info_parser = subparsers.add_parser("info", help="Show the annexes of a project")
    info_parser.add_argument("project", help="Project JSON file")
    info_parser.add_argument("--files-dir", help="Directory holding the documents")

    subparsers.add_parser("version", help="Show version information")

    return parser


def cmd_init(args) -> int:
    annexes = []
    for name in args.files:
        path = Path(name)
        if not path.exists():
            failure(f"File not found: {path}")
            return 1
        annexes.append(create_annex(path.name))

    project = ProjectModel(annexes=append_annexes([], annexes))
    output = save_project(project, args.output)
    success(f"Project written: {output} ({len(project.annexes)} annexes)")
    return 0


def cmd_export(args) -> int:
    project_path = Path(args.project)
    project = load_project(project_path)
    files_dir = Path(args.files_dir) if args.files_dir else project_path.parent
    project = attach_files(project, files_dir)

    options = ExportOptions(
        font_regular_path=Path(args.font_regular) if args.font_regular else None,
        font_bold_path=Path(args.font_bold) if args.font_bold else None,
        transliterate=not args.keep_diacritics,
        apply_stamp=not args.no_stamp,
        strict_pdf=args.strict,
    )
    assembler = BundleAssembler(options)
    assembler.font_provider.preload()
    result = assembler.build(project.to_request())
    output = write_bundle(result.data, args.output_dir)

    for issue in result.issues:
        where = f"annex {issue.annex_number}"
        if issue.document_index is not None:
            where += f", document {issue.document_index}"
        console.print(f"[yellow]! {issue.kind} issue ({where}): {escape(issue.message)}[/yellow]")

    success(f"Saved: {output} ({result.page_count} pages, {result.annex_count} annexes)")
    return 0


def cmd_info(args) -> int:
    project_path = Path(args.project)
    project = load_project(project_path)
    if args.files_dir:
        project = attach_files(project, args.files_dir)

    table = Table(title=f"Annexes in {project_path.name}")
    table.add_column("Nr.", justify="right")
    table.add_column("Title")
    table.add_column("Documents", justify="right")
    table.add_column("Files")
    for annex in project.annexes:
        table.add_row(
            str(annex.annex_number),
            escape(display_title(annex)),
            str(len(annex.documents)),
            ", ".join(document.source_file_path for document in annex.documents) or "-",
        )
    console.print(table)

    stats = bundle_stats(project.annexes)
    console.print(f"Annexes: {stats.annex_count} ({stats.empty_annex_count} empty)")
    console.print(f"Documents: {stats.document_count}")
    if args.files_dir:
        console.print(f"Total size: {format_bytes(stats.total_bytes)}")
        console.print(f"Documents without content: {stats.missing_content_count}")
    return 0


def cmd_version(args=None) -> int:
    from . import __version__

    console.print(f"Caselib Bundle v{__version__}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    package_logger = setup_rich_logging(args.log_level)
    if args.log_file:
        add_file_handler(package_logger, args.log_file, args.log_level)

    commands = {
        "init": cmd_init,
        "export": cmd_export,
        "info": cmd_info,
        "version": cmd_version,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except BundleError as exc:
        failure(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
