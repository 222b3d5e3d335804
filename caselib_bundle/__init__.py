"""
Caselib Bundle - assemble legal annex bundles into a single PDF.

A bundle starts with a table of contents ("opis"), followed by every annex:
a cover page and the annex's documents, with separator pages between
documents of the same annex.

Quick Start:
    from caselib_bundle import ExportRequest, assemble
    from caselib_bundle.models.collection import append_annexes, create_annex

    annexes = append_annexes([], [create_annex("contract.pdf", pdf_bytes)])
    data = assemble(ExportRequest(annexes=annexes))
"""

__version__ = "1.0.0"

from .assembler import BundleAssembler, BundleResult, ExportStage, assemble
from .config import ExportOptions
from .exceptions import (
    AssetError,
    BundleError,
    BundleValidationError,
    DocumentImportError,
    FontError,
    ProjectError,
    RenderingError,
)
from .models import (
    AnnexItem,
    ColorTheme,
    DocumentItem,
    ExportRequest,
    FormattingOptions,
    default_cover_formatting,
    default_opis_formatting,
    display_title,
)
from .project import ProjectModel, load_project, save_project
from .utils.transliteration import normalize

__all__ = [
    "__version__",
    "AnnexItem",
    "AssetError",
    "BundleAssembler",
    "BundleError",
    "BundleResult",
    "BundleValidationError",
    "ColorTheme",
    "DocumentImportError",
    "DocumentItem",
    "ExportOptions",
    "ExportRequest",
    "ExportStage",
    "FontError",
    "FormattingOptions",
    "ProjectError",
    "ProjectModel",
    "RenderingError",
    "assemble",
    "default_cover_formatting",
    "default_opis_formatting",
    "display_title",
    "load_project",
    "normalize",
    "save_project",
]
