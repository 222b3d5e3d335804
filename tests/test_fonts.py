"""
Tests for font loading and registration.
"""

import threading

import pytest

from caselib_bundle.exceptions import FontError
from caselib_bundle.fonts import FontProvider, LoadOnce, default_font_provider, register_fonts
from caselib_bundle.fonts.font_provider import DEFAULT_BOLD_FONT, DEFAULT_REGULAR_FONT


class TestLoadOnce:

    def test_loader_runs_once(self):
        calls = []

        def loader():
            calls.append(1)
            return b"data"

        cell = LoadOnce(loader)
        assert not cell.loaded
        assert cell.get() == b"data"
        assert cell.get() == b"data"
        assert cell.loaded
        assert len(calls) == 1

    def test_concurrent_callers_share_result(self):
        calls = []
        cell = LoadOnce(lambda: calls.append(1) or object())
        results = []
        threads = [threading.Thread(target=lambda: results.append(cell.get())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert all(result is results[0] for result in results)

    def test_failure_allows_retry(self):
        attempts = []

        def loader():
            attempts.append(1)
            if len(attempts) == 1:
                raise FontError("boom")
            return b"ok"

        cell = LoadOnce(loader)
        with pytest.raises(FontError):
            cell.get()
        assert cell.get() == b"ok"


class TestFontProvider:

    def test_default_faces_exist(self):
        assert DEFAULT_REGULAR_FONT.exists()
        assert DEFAULT_BOLD_FONT.exists()

    def test_memoized_bytes(self):
        provider = FontProvider()
        assert provider.load_regular() is provider.load_regular()
        assert provider.load_bold() != provider.load_regular()

    def test_default_provider_is_shared(self):
        assert default_font_provider() is default_font_provider()

    def test_missing_file(self, temp_dir):
        provider = FontProvider(regular_path=temp_dir / "missing.ttf")
        with pytest.raises(FontError):
            provider.load_regular()
        assert provider.preload() is False

    def test_preload(self):
        assert FontProvider().preload() is True


class TestRegisterFonts:

    def test_registers_both_faces(self):
        fonts = register_fonts(FontProvider())
        assert fonts.regular.startswith("BundleSans-")
        assert fonts.bold.startswith("BundleSans-Bold-")
        assert fonts.pick(True) == fonts.bold
        assert fonts.pick(False) == fonts.regular

    def test_registration_is_stable(self):
        assert register_fonts(FontProvider()) == register_fonts(FontProvider())

    def test_invalid_font_data(self, temp_dir):
        bogus = temp_dir / "bogus.ttf"
        bogus.write_bytes(b"this is not a font")
        with pytest.raises(FontError):
            register_fonts(FontProvider(regular_path=bogus))
