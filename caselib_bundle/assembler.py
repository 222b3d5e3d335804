"""
Bundle assembly: opis, then for every annex its cover page and documents.

The assembler walks the annexes strictly in order. Every annex is processed
inside its own failure boundary and reports back an :class:`AnnexRendered`
or :class:`AnnexFailed` value; every document import reports a
:class:`~caselib_bundle.importers.DocumentImported` or
:class:`~caselib_bundle.importers.ImportFailed` value. Only validation
problems and font errors stop an export.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import List, Optional, Sequence, Union

from pypdf import PageObject, PdfReader, PdfWriter

from .config import ExportOptions
from .exceptions import BundleValidationError, FontError
from .fonts.font_provider import FontProvider
from .fonts.font_registry import register_fonts
from .importers.pdf_importer import DocumentImported, import_pdf
from .models.collection import renumber
from .models.document import AnnexItem, DocumentItem, ExportRequest, display_title
from .models.formatting import FormattingOptions
from .renderers.cover_renderer import CoverPageRenderer
from .renderers.error_renderer import ErrorPageRenderer
from .renderers.opis_renderer import OpisRenderer, OpisRow
from .renderers.render_utils import RenderedPages
from .renderers.separator_renderer import SeparatorPageRenderer
from .renderers.stamp_renderer import StampRenderer

logger = logging.getLogger(__name__)


class ExportStage(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    RENDERING_OPIS = "rendering_opis"
    RENDERING_ANNEX = "rendering_annex"
    RENDERING_DOCUMENT = "rendering_document"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ExportIssue:
    """A recovered problem, kept for the caller's report."""

    kind: str
    annex_number: int
    message: str
    document_index: Optional[int] = None
    filename: Optional[str] = None


@dataclass
class AnnexRendered:
    annex_number: int
    pages: List[PageObject] = field(repr=False)


@dataclass
class AnnexFailed:
    annex_number: int
    pages: List[PageObject] = field(repr=False)
    error: Optional[Exception] = None


AnnexOutcome = Union[AnnexRendered, AnnexFailed]


@dataclass
class BundleResult:
    data: bytes = field(repr=False)
    page_count: int
    annex_count: int
    issues: List[ExportIssue] = field(default_factory=list)


@dataclass
class PageRenderers:
    opis: OpisRenderer
    cover: CoverPageRenderer
    separator: SeparatorPageRenderer
    error: ErrorPageRenderer


def pages_of(rendered: RenderedPages) -> List[PageObject]:
    return list(PdfReader(BytesIO(rendered.data)).pages)


class BundleDocument:
    """The output document; only the running assembler appends to it."""

    def __init__(self) -> None:
        self._writer = PdfWriter()

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def add_pages(self, pages: Sequence[PageObject]) -> None:
        for page in pages:
            self._writer.add_page(page)

    def to_bytes(self) -> bytes:
        self._writer.add_metadata({"/Title": "Bundle anexe", "/Producer": "caselib-bundle"})
        buffer = BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()


class BundleAssembler:
    """Build the merged PDF for an :class:`ExportRequest`."""

    def __init__(self, options: Optional[ExportOptions] = None,
                 font_provider: Optional[FontProvider] = None) -> None:
        self.options = options or ExportOptions()
        self.font_provider = font_provider or self.options.font_provider()
        self.stage = ExportStage.IDLE
        self.issues: List[ExportIssue] = []
        self._renderers: Optional[PageRenderers] = None

    @property
    def renderers(self) -> PageRenderers:
        """Renderers bound to the registered fonts; a font failure raises FontError."""
        if self._renderers is None:
            fonts = register_fonts(self.font_provider)
            transliterate = self.options.transliterate
            self._renderers = PageRenderers(
                opis=OpisRenderer(fonts, transliterate),
                cover=CoverPageRenderer(fonts, transliterate),
                separator=SeparatorPageRenderer(fonts, transliterate),
                error=ErrorPageRenderer(fonts, transliterate),
            )
        return self._renderers

    def assemble(self, request: ExportRequest) -> bytes:
        return self.build(request).data

    def build(self, request: ExportRequest) -> BundleResult:
        self.issues = []
        try:
            self._set_stage(ExportStage.VALIDATING)
            annexes = self._validate(request)
            renderers = self.renderers
            document = BundleDocument()

            self._set_stage(ExportStage.RENDERING_OPIS)
            rows = [OpisRow(annex.annex_number, display_title(annex)) for annex in annexes]
            document.add_pages(pages_of(renderers.opis.render(rows, request.opis_formatting)))

            for annex in annexes:
                self._set_stage(ExportStage.RENDERING_ANNEX, annex.annex_number)
                outcome = self._render_annex(annex, request.cover_formatting, renderers,
                                             first_page=document.page_count + 1)
                document.add_pages(outcome.pages)
                if isinstance(outcome, AnnexFailed):
                    document.add_pages(self._annex_error_pages(annex, outcome, request.cover_formatting,
                                                               renderers, document.page_count + 1))

            self._set_stage(ExportStage.FINALIZING)
            if document.page_count == 0:
                raise BundleValidationError("The bundle has no pages")
            data = document.to_bytes()
            page_count = document.page_count
        except Exception:
            self._set_stage(ExportStage.FAILED)
            raise

        self._set_stage(ExportStage.DONE)
        logger.info("Bundle assembled: %d annexes, %d pages, %d issue(s)",
                    len(annexes), page_count, len(self.issues))
        return BundleResult(data=data, page_count=page_count, annex_count=len(annexes),
                            issues=list(self.issues))

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _validate(self, request: ExportRequest) -> List[AnnexItem]:
        if not request.annexes:
            raise BundleValidationError("There are no annexes to export")
        numbered = renumber(request.annexes)
        annexes = [annex for annex in numbered if not annex.is_empty]
        if not annexes:
            raise BundleValidationError("No annex contains any documents")
        skipped = [annex.annex_number for annex in numbered if annex.is_empty]
        if skipped:
            logger.info("Leaving out empty annexes: %s", ", ".join(map(str, skipped)))
        return annexes

    def _render_annex(self, annex: AnnexItem, formatting: FormattingOptions,
                      renderers: PageRenderers, first_page: int) -> AnnexOutcome:
        number = annex.annex_number
        staged: List[PageObject] = []
        try:
            cover = renderers.cover.render(number, display_title(annex), formatting, page_number=first_page)
            staged.extend(pages_of(cover))

            stamp = None
            if self.options.apply_stamp and formatting.stamp_enabled:
                stamp = StampRenderer(renderers.cover.fonts, formatting, number, self.options.transliterate)

            total = len(annex.documents)
            for index, item in enumerate(annex.documents, start=1):
                self._set_stage(ExportStage.RENDERING_DOCUMENT, number, index)
                if index > 1:
                    staged.extend(self._separator_pages(number, index, total, item, formatting, renderers,
                                                        first_page + len(staged)))
                staged.extend(self._document_pages(number, index, item, formatting, renderers, stamp,
                                                   first_page + len(staged)))
        except FontError:
            raise
        except Exception as exc:
            logger.error("Annex %d failed after %d page(s): %s", number, len(staged), exc, exc_info=True)
            self.issues.append(ExportIssue("annex", number, str(exc)))
            return AnnexFailed(number, staged, exc)
        return AnnexRendered(number, staged)

    def _document_pages(self, annex_number: int, index: int, item: DocumentItem,
                        formatting: FormattingOptions, renderers: PageRenderers,
                        stamp: Optional[StampRenderer], page_number: int) -> List[PageObject]:
        result = import_pdf(item.file_bytes, item.source_file_path, strict=self.options.strict_pdf)
        if isinstance(result, DocumentImported):
            if stamp is not None:
                return [self._stamped(page, stamp, annex_number, index, item) for page in result.pages]
            return result.pages

        logger.warning("Annex %d, document %d (%s) replaced by an error page: %s",
                       annex_number, index, item.source_file_path, result.error)
        self.issues.append(ExportIssue("document", annex_number, str(result.error),
                                       document_index=index, filename=item.source_file_path))
        error_page = renderers.error.render_document_error(
            item.source_file_path, annex_number, index, formatting,
            reason=result.error.message, page_number=page_number,
        )
        return pages_of(error_page)

    def _separator_pages(self, annex_number: int, index: int, total: int, item: DocumentItem,
                         formatting: FormattingOptions, renderers: PageRenderers,
                         page_number: int) -> List[PageObject]:
        try:
            rendered = renderers.separator.render(annex_number, index, total, item.auto_title,
                                                  formatting, page_number=page_number)
            return pages_of(rendered)
        except Exception as exc:
            logger.warning("Skipping separator before annex %d, document %d: %s", annex_number, index, exc)
            self.issues.append(ExportIssue("separator", annex_number, str(exc), document_index=index,
                                           filename=item.source_file_path))
            return []

    def _stamped(self, page: PageObject, stamp: StampRenderer, annex_number: int, index: int,
                 item: DocumentItem) -> PageObject:
        try:
            return stamp.apply(page)
        except Exception as exc:
            logger.warning("Stamp not applied to annex %d, document %d (%s): %s",
                           annex_number, index, item.source_file_path, exc)
            self.issues.append(ExportIssue("stamp", annex_number, str(exc), document_index=index,
                                           filename=item.source_file_path))
            return page

    def _annex_error_pages(self, annex: AnnexItem, outcome: AnnexFailed, formatting: FormattingOptions,
                           renderers: PageRenderers, page_number: int) -> List[PageObject]:
        reason = str(outcome.error) if outcome.error is not None else None
        try:
            rendered = renderers.error.render_annex_error(annex.annex_number, display_title(annex), formatting,
                                                          reason=reason, page_number=page_number)
            return pages_of(rendered)
        except FontError:
            raise
        except Exception as exc:
            logger.error("No error page for annex %d: %s", annex.annex_number, exc, exc_info=True)
            self.issues.append(ExportIssue("annex-error-page", annex.annex_number, str(exc)))
            return []

    def _set_stage(self, stage: ExportStage, annex_number: Optional[int] = None,
                   document_index: Optional[int] = None) -> None:
        self.stage = stage
        if document_index is not None:
            logger.debug("Stage %s (annex %s, document %s)", stage.value, annex_number, document_index)
        elif annex_number is not None:
            logger.debug("Stage %s (annex %s)", stage.value, annex_number)
        else:
            logger.debug("Stage %s", stage.value)


def assemble(request: ExportRequest, options: Optional[ExportOptions] = None) -> bytes:
    """Export entry point: merged PDF bytes for ``request``."""
    return BundleAssembler(options).assemble(request)
