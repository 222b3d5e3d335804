"""
Project files: the annex list and both formatting blocks as JSON.

File contents and logo bytes are never written; only their names are.
:func:`attach_files` reads the documents back from a directory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from .exceptions import ProjectError
from .models.collection import renumber
from .models.document import AnnexItem, DocumentItem, ExportRequest, generate_auto_title, generate_id
from .models.formatting import FormattingOptions, default_cover_formatting, default_opis_formatting

logger = logging.getLogger(__name__)

PROJECT_VERSION = "1.0"
DEFAULT_PROJECT_FILENAME = "annex-bundle.json"


@dataclass
class ProjectModel:
    annexes: List[AnnexItem] = field(default_factory=list)
    opis_formatting: FormattingOptions = field(default_factory=default_opis_formatting)
    cover_formatting: FormattingOptions = field(default_factory=default_cover_formatting)
    project_version: str = PROJECT_VERSION

    def to_request(self) -> ExportRequest:
        return ExportRequest(
            annexes=list(self.annexes),
            opis_formatting=self.opis_formatting,
            cover_formatting=self.cover_formatting,
        )


def _document_to_dict(document: DocumentItem) -> Dict[str, Any]:
    return {
        "id": document.id,
        "sourceFilePath": document.source_file_path,
        "autoTitle": document.auto_title,
    }


def _annex_to_dict(annex: AnnexItem) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": annex.id,
        "annexNumber": annex.annex_number,
        "documents": [_document_to_dict(document) for document in annex.documents],
    }
    if annex.user_title:
        data["userTitle"] = annex.user_title
    return data


def project_to_dict(project: ProjectModel) -> Dict[str, Any]:
    return {
        "annexes": [_annex_to_dict(annex) for annex in project.annexes],
        "opisFormatting": project.opis_formatting.to_dict(),
        "coverFormatting": project.cover_formatting.to_dict(),
        "projectVersion": project.project_version,
    }


def _document_from_dict(data: Mapping[str, Any]) -> DocumentItem:
    source = str(data.get("sourceFilePath") or "")
    return DocumentItem(
        id=str(data.get("id") or generate_id()),
        source_file_path=source,
        auto_title=str(data.get("autoTitle") or generate_auto_title(source)),
    )


def _annex_from_dict(data: Mapping[str, Any]) -> AnnexItem:
    documents = data.get("documents") or []
    user_title = data.get("userTitle")
    return AnnexItem(
        id=str(data.get("id") or generate_id()),
        annex_number=int(data.get("annexNumber") or 0),
        documents=tuple(_document_from_dict(item) for item in documents if isinstance(item, Mapping)),
        user_title=str(user_title) if user_title else None,
    )


def project_from_dict(data: Mapping[str, Any]) -> ProjectModel:
    """
    Rebuild a project, tolerating older or partial files.

    Missing ``documents`` arrays become empty annexes and missing formatting
    blocks fall back to the defaults. Annexes are renumbered by position.
    """
    if not isinstance(data, Mapping):
        raise ProjectError("Project data must be a JSON object")
    raw_annexes = data.get("annexes") or []
    if not isinstance(raw_annexes, list):
        raise ProjectError("Project 'annexes' must be a list")

    annexes = renumber([_annex_from_dict(item) for item in raw_annexes if isinstance(item, Mapping)])
    return ProjectModel(
        annexes=annexes,
        opis_formatting=FormattingOptions.from_dict(data.get("opisFormatting"), default_opis_formatting()),
        cover_formatting=FormattingOptions.from_dict(data.get("coverFormatting"), default_cover_formatting()),
        project_version=str(data.get("projectVersion") or PROJECT_VERSION),
    )


def dumps(project: ProjectModel) -> str:
    return json.dumps(project_to_dict(project), indent=2, ensure_ascii=False)


def loads(text: str) -> ProjectModel:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectError("Project file is not valid JSON", str(exc)) from exc
    return project_from_dict(data)


def save_project(project: ProjectModel, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.write_text(dumps(project), encoding="utf-8")
    logger.info("Project saved to %s (%d annexes)", target, len(project.annexes))
    return target


def load_project(path: Union[str, Path]) -> ProjectModel:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProjectError(f"Cannot read project file {source}", str(exc)) from exc
    project = loads(text)
    logger.info("Project loaded from %s (%d annexes)", source, len(project.annexes))
    return project


def attach_files(project: ProjectModel, directory: Union[str, Path]) -> ProjectModel:
    """
    Return a copy of ``project`` with document and logo bytes read from ``directory``.

    Documents whose file is missing keep no content; the assembler turns
    them into error pages. Only cover pages draw a logo; a missing logo
    file leaves the covers without one.
    """
    base = Path(directory)
    annexes = []
    for annex in project.annexes:
        documents = []
        for document in annex.documents:
            path = base / document.source_file_path
            try:
                data = path.read_bytes()
            except OSError as exc:
                logger.warning("Cannot read %s for annex %d: %s", path, annex.annex_number, exc)
                data = None
            documents.append(replace(document, file_bytes=data))
        annexes.append(replace(annex, documents=tuple(documents)))
    return replace(
        project,
        annexes=annexes,
        cover_formatting=_attach_logo(project.cover_formatting, base),
    )


def _attach_logo(formatting: FormattingOptions, base: Path) -> FormattingOptions:
    if not formatting.logo_path or formatting.logo_file:
        return formatting
    path = base / formatting.logo_path
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.warning("Cannot read cover logo %s: %s", path, exc)
        return formatting
    logger.debug("Attached cover logo %s (%d bytes)", path, len(data))
    return replace(formatting, logo_file=data)
