"""Tests for message translation."""

import pytest  # type: ignore[import-not-found]

from worklog.core.errors import StoreError, ValidationError
from worklog.i18n import Translator, detect_language, normalize_language
from worklog.i18n.catalogs import ENGLISH, SWEDISH


class TestNormalizeLanguage:
    """Test language code normalization."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("sv", "sv"),
            ("sv_SE.UTF-8", "sv"),
            ("en_US.UTF-8", "en"),
            ("en-GB", "en"),
            ("Svenska", "sv"),
            ("swedish", "sv"),
            ("English", "en"),
            ("engelska", "en"),
            ("de_DE", "sv"),
            ("C.UTF-8", "sv"),
        ],
    )
    def test_normalize(self, value: str, expected: str) -> None:
        """Test locales and language names."""
        assert normalize_language(value) == expected


class TestDetectLanguage:
    """Test the language detection cascade."""

    def test_default_is_swedish(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the fallback with nothing set."""
        monkeypatch.delenv("LANG", raising=False)
        assert detect_language(None) == "sv"

    def test_lang_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that LANG is used when nothing else is set."""
        monkeypatch.setenv("LANG", "en_US.UTF-8")
        assert detect_language(None) == "en"

    def test_config_wins_over_lang(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the configured language beats LANG."""
        monkeypatch.setenv("LANG", "en_US.UTF-8")
        assert detect_language("sv") == "sv"

    def test_worklog_lang_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that WORKLOG_LANG beats everything."""
        monkeypatch.setenv("WORKLOG_LANG", "en")
        monkeypatch.setenv("LANG", "sv_SE.UTF-8")
        assert detect_language("sv") == "en"


class TestTranslator:
    """Test Translator."""

    def test_translate_with_params(self) -> None:
        """Test message formatting."""
        t = Translator("en")
        assert t("export.success", count=3, path="out.csv") == "Exported 3 entries to out.csv"
        assert t("add.output.hours", value=3.5) == "Hours: 3.50"

    def test_swedish(self) -> None:
        """Test the Swedish catalog."""
        t = Translator("sv")
        assert t("get.no_results") == "Inga tidrapporter hittades"

    def test_unknown_key_returned(self) -> None:
        """Test that a missing key comes back unchanged."""
        assert Translator("en")("no.such.key") == "no.such.key"

    def test_catalogs_have_same_keys(self) -> None:
        """Test that every message exists in both languages."""
        assert set(ENGLISH) == set(SWEDISH)

    def test_detect(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test building a translator from the detected language."""
        monkeypatch.setenv("WORKLOG_LANG", "english")
        assert Translator.detect().language == "en"

    def test_key_as_format_param(self) -> None:
        """Test that a message may take a parameter named key."""
        assert Translator("en")("config.key_not_found", key="defaults.client") == (
            "Configuration key 'defaults.client' not found"
        )


class TestLocalizedErrors:
    """Test that errors render in the translator's language."""

    def test_validation_error(self) -> None:
        """Test a validation error in English and Swedish."""
        error = ValidationError("error.hours_positive")

        assert str(error) == "Hours must be greater than 0"
        assert error.describe(Translator("sv")) == "Timmar måste vara större än 0"

    def test_error_with_params(self) -> None:
        """Test parameters are substituted in both languages."""
        error = ValidationError("error.invalid_date", value="15/03/2024")

        assert "15/03/2024" in str(error)
        assert error.describe(Translator("sv")) == (
            "Ogiltigt datumformat '15/03/2024', använd ÅÅÅÅ-MM-DD"
        )

    def test_store_error_names_operation(self) -> None:
        """Test the failed operation is translated too."""
        error = StoreError("store.save_entry", Exception("disk full"))

        assert str(error) == "Store operation failed: save time entry (disk full)"
        assert error.describe(Translator("sv")) == (
            "Databasåtgärden misslyckades: spara tidrapport (disk full)"
        )
