"""
Tests for project files, bundle export naming and statistics.
"""

import json
from datetime import datetime, timezone

import pytest

from caselib_bundle.exceptions import ProjectError
from caselib_bundle.export import bundle_filename, write_bundle
from caselib_bundle.models.collection import add_document_to_annex, append_annexes, create_annex, set_user_title
from caselib_bundle.models.document import AnnexItem
from caselib_bundle.models.formatting import FormattingOptions
from caselib_bundle.models.theme import find_preset
from caselib_bundle.project import (
    ProjectModel,
    attach_files,
    dumps,
    load_project,
    loads,
    project_from_dict,
    save_project,
)
from caselib_bundle.stats import bundle_stats, format_bytes


@pytest.fixture
def project():
    first = set_user_title(create_annex("cerere.pdf", b"%PDF-1"), "Cerere de chemare în judecată")
    second = add_document_to_annex(create_annex("dovada_1.pdf"), "dovada_2.pdf")
    opis = FormattingOptions(heading_format="OPIS DOSAR", theme=find_preset("Gri modern"))
    return ProjectModel(annexes=append_annexes([], [first, second]), opis_formatting=opis)


class TestProjectSerialization:

    def test_round_trip(self, project):
        restored = loads(dumps(project))
        assert [a.id for a in restored.annexes] == [a.id for a in project.annexes]
        assert restored.annexes[0].user_title == "Cerere de chemare în judecată"
        assert restored.annexes[1].documents[1].auto_title == "dovada 2"
        assert restored.opis_formatting == project.opis_formatting
        assert restored.cover_formatting == project.cover_formatting

    def test_file_bytes_not_written(self, project):
        data = json.loads(dumps(project))
        document = data["annexes"][0]["documents"][0]
        assert set(document) == {"id", "sourceFilePath", "autoTitle"}
        assert data["projectVersion"] == "1.0"

    def test_keeps_diacritics(self, project):
        assert "judecată" in dumps(project)

    def test_renumbers_on_load(self):
        data = {"annexes": [{"id": "a", "annexNumber": 4}, {"id": "b", "annexNumber": 4, "documents": []}]}
        project = project_from_dict(data)
        assert [a.annex_number for a in project.annexes] == [1, 2]
        assert all(a.is_empty for a in project.annexes)

    def test_missing_blocks_use_defaults(self):
        project = project_from_dict({})
        assert project.annexes == []
        assert project.cover_formatting.heading_text(1) == "ANEXA 1"

    @pytest.mark.parametrize("data", [[], {"annexes": "nope"}])
    def test_bad_shapes(self, data):
        with pytest.raises(ProjectError):
            project_from_dict(data)

    def test_invalid_json(self):
        with pytest.raises(ProjectError):
            loads("{not json")

    def test_to_request(self, project):
        request = project.to_request()
        assert list(request.annexes) == project.annexes
        assert request.opis_formatting is project.opis_formatting


class TestProjectFiles:

    def test_save_and_load(self, project, temp_dir):
        path = save_project(project, temp_dir / "dosar.json")
        assert load_project(path).annexes[1].documents[0].source_file_path == "dovada_1.pdf"

    def test_load_missing_file(self, temp_dir):
        with pytest.raises(ProjectError):
            load_project(temp_dir / "missing.json")

    def test_attach_files(self, project, temp_dir):
        (temp_dir / "cerere.pdf").write_bytes(b"%PDF-cerere")
        (temp_dir / "dovada_1.pdf").write_bytes(b"%PDF-dovada")

        attached = attach_files(loads(dumps(project)), temp_dir)
        assert attached.annexes[0].documents[0].file_bytes == b"%PDF-cerere"
        assert attached.annexes[1].documents[0].has_content
        assert not attached.annexes[1].documents[1].has_content


class TestExportFile:

    def test_filename(self):
        moment = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)
        assert bundle_filename(moment) == "bundle-annexes-20240305T140709.pdf"

    def test_filename_converts_to_utc(self):
        from datetime import timedelta
        moment = datetime(2024, 3, 5, 16, 7, 9, tzinfo=timezone(timedelta(hours=2)))
        assert bundle_filename(moment) == "bundle-annexes-20240305T140709.pdf"

    def test_write_bundle(self, temp_dir):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        path = write_bundle(b"%PDF-data", temp_dir / "out", moment)
        assert path.name == "bundle-annexes-20240101T000000.pdf"
        assert path.read_bytes() == b"%PDF-data"


class TestStats:

    def test_counts(self, project):
        annexes = project.annexes + [AnnexItem(id="empty", annex_number=3)]
        stats = bundle_stats(annexes)
        assert stats.annex_count == 3
        assert stats.document_count == 3
        assert stats.empty_annex_count == 1
        assert stats.missing_content_count == 2
        assert stats.total_bytes == 6
        assert stats.exportable

    def test_nothing_exportable(self):
        assert not bundle_stats([AnnexItem(id="a", annex_number=1)]).exportable
        assert not bundle_stats([]).exportable

    @pytest.mark.parametrize("size,expected", [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (5 * 1024 ** 3, "5 GB"),
    ])
    def test_format_bytes(self, size, expected):
        assert format_bytes(size) == expected


class TestProjectValidation:

    def test_bad_formatting_value_rejected(self):
        with pytest.raises(ProjectError):
            loads(json.dumps({"annexes": [], "coverFormatting": {"marginTop": "wide"}}))

    def test_numeric_strings_accepted(self):
        project = loads(json.dumps({"annexes": [], "coverFormatting": {"marginTop": "15"}}))
        assert project.cover_formatting.margin_top == 15.0


class TestAttachLogo:

    def test_cover_logo_loaded(self, project, temp_dir, png_logo):
        (temp_dir / "sigla.png").write_bytes(png_logo)
        project.cover_formatting.logo_path = "sigla.png"

        attached = attach_files(loads(dumps(project)), temp_dir)
        assert attached.cover_formatting.logo_file == png_logo
        assert project.cover_formatting.logo_file is None

    def test_missing_logo_logged(self, project, temp_dir, caplog):
        project.cover_formatting.logo_path = "lipsa.png"
        with caplog.at_level("WARNING", logger="caselib_bundle.project"):
            attached = attach_files(project, temp_dir)
        assert attached.cover_formatting.logo_file is None
        assert "lipsa.png" in caplog.text

    def test_no_logo_path(self, project, temp_dir):
        attached = attach_files(project, temp_dir)
        assert attached.cover_formatting.logo_file is None
