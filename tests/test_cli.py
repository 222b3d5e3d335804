"""
Tests for the command-line interface.
"""

import json
import logging
from io import BytesIO

import pytest
from pypdf import PdfReader

from caselib_bundle import __version__
from caselib_bundle.cli import create_parser, main
from caselib_bundle.project import load_project
from caselib_bundle.utils.rich_logger import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def workspace(temp_dir, pdf_factory):
    (temp_dir / "cerere.pdf").write_bytes(pdf_factory(1, "Cerere"))
    (temp_dir / "dovada.pdf").write_bytes(pdf_factory(2, "Dovada"))
    return temp_dir


class TestParser:

    def test_export_defaults(self):
        args = create_parser().parse_args(["export", "dosar.json"])
        assert args.command == "export"
        assert args.output_dir == "."
        assert args.files_dir is None
        assert not args.keep_diacritics

    def test_invalid_log_level(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--log-level", "LOUD", "version"])


class TestCommands:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "caselib-bundle" in capsys.readouterr().out

    def test_version(self):
        assert main(["version"]) == 0
        assert __version__ == "1.0.0"

    def test_init(self, workspace):
        output = workspace / "dosar.json"
        files = [str(workspace / "cerere.pdf"), str(workspace / "dovada.pdf")]
        assert main(["init", *files, "-o", str(output)]) == 0

        project = load_project(output)
        assert [a.annex_number for a in project.annexes] == [1, 2]
        assert project.annexes[1].documents[0].source_file_path == "dovada.pdf"

    def test_init_missing_file(self, workspace):
        assert main(["init", str(workspace / "absent.pdf"), "-o", str(workspace / "p.json")]) == 1
        assert not (workspace / "p.json").exists()

    def test_export(self, workspace):
        project_file = workspace / "dosar.json"
        main(["init", str(workspace / "cerere.pdf"), str(workspace / "dovada.pdf"), "-o", str(project_file)])

        out_dir = workspace / "out"
        assert main(["export", str(project_file), "--output-dir", str(out_dir)]) == 0

        bundles = list(out_dir.glob("bundle-annexes-*.pdf"))
        assert len(bundles) == 1
        # opis, cover + 1 page, cover + 2 pages
        assert len(PdfReader(BytesIO(bundles[0].read_bytes())).pages) == 6

    def test_export_with_missing_document(self, workspace):
        project_file = workspace / "dosar.json"
        main(["init", str(workspace / "cerere.pdf"), "-o", str(project_file)])
        data = json.loads(project_file.read_text(encoding="utf-8"))
        data["annexes"][0]["documents"][0]["sourceFilePath"] = "disparut.pdf"
        project_file.write_text(json.dumps(data), encoding="utf-8")

        assert main(["export", str(project_file), "--output-dir", str(workspace / "out")]) == 0
        assert len(list((workspace / "out").glob("*.pdf"))) == 1

    def test_export_bad_project(self, workspace):
        broken = workspace / "broken.json"
        broken.write_text("{oops", encoding="utf-8")
        assert main(["export", str(broken)]) == 1

    def test_export_all_empty(self, workspace):
        project_file = workspace / "gol.json"
        project_file.write_text(json.dumps({"annexes": [{"id": "a"}]}), encoding="utf-8")
        assert main(["export", str(project_file), "--output-dir", str(workspace / "out")]) == 1
        assert not (workspace / "out").exists()

    def test_info(self, workspace):
        project_file = workspace / "dosar.json"
        main(["init", str(workspace / "cerere.pdf"), "-o", str(project_file)])
        assert main(["info", str(project_file), "--files-dir", str(workspace)]) == 0

    def test_log_file(self, workspace):
        log_file = workspace / "logs" / "bundle.log"
        project_file = workspace / "dosar.json"
        assert main(["--log-file", str(log_file), "init", str(workspace / "cerere.pdf"),
                     "-o", str(project_file)]) == 0
        assert "Project saved" in log_file.read_text()


class TestExportFormatting:

    def test_cover_logo_from_project(self, workspace, png_logo):
        (workspace / "sigla.png").write_bytes(png_logo)
        project_file = workspace / "dosar.json"
        main(["init", str(workspace / "cerere.pdf"), "-o", str(project_file)])
        data = json.loads(project_file.read_text(encoding="utf-8"))
        data["coverFormatting"]["logoPath"] = "sigla.png"
        project_file.write_text(json.dumps(data), encoding="utf-8")

        out_dir = workspace / "out"
        assert main(["export", str(project_file), "--output-dir", str(out_dir)]) == 0

        reader = PdfReader(BytesIO(next(out_dir.glob("*.pdf")).read_bytes()))
        assert len(reader.pages[1].images) == 1
        assert len(reader.pages[0].images) == 0

    def test_invalid_formatting_value(self, workspace):
        project_file = workspace / "dosar.json"
        main(["init", str(workspace / "cerere.pdf"), "-o", str(project_file)])
        data = json.loads(project_file.read_text(encoding="utf-8"))
        data["coverFormatting"]["marginTop"] = "wide"
        project_file.write_text(json.dumps(data), encoding="utf-8")

        assert main(["export", str(project_file), "--output-dir", str(workspace / "out")]) == 1
        assert not (workspace / "out").exists()
