# tests/cli/i18n/test_i18n.py
"""
Tests for cli/i18n - Internationalization module

Tests cover:
- Translation function (t)
- Language context management
- Message registry
- Format string interpolation
- Message completeness
"""

import string

import pytest

from cli.i18n import DEFAULT_LANG, SUPPORTED_LANGS, get_lang, set_lang, t
from cli.i18n.messages import MESSAGES
from core.config import settings


@pytest.fixture(autouse=True)
def reset_lang():
    set_lang(DEFAULT_LANG)
    yield
    set_lang(DEFAULT_LANG)


# =============================================================================
# Language Context Tests
# =============================================================================


class TestLanguageContext:
    """Test language context management"""

    def test_default_language(self):
        """Default language is Korean"""
        assert DEFAULT_LANG == "ko"
        assert get_lang() == "ko"

    def test_supported_languages(self):
        assert SUPPORTED_LANGS == ("ko", "en")
        assert SUPPORTED_LANGS == settings.SUPPORTED_LANGS

    def test_set_lang(self):
        set_lang("en")
        assert get_lang() == "en"

    def test_unsupported_falls_back(self):
        """Unsupported language resets to default"""
        set_lang("en")
        set_lang("fr")
        assert get_lang() == DEFAULT_LANG


# =============================================================================
# Translation Tests
# =============================================================================


class TestTranslate:
    def test_context_language(self):
        set_lang("en")
        assert t("browser.loading") == "Loading..."

    def test_explicit_language_overrides_context(self):
        assert t("browser.loading", lang="en") == "Loading..."
        assert t("browser.loading") == "불러오는 중..."

    def test_interpolation(self):
        assert t("browser.item_count", lang="en", name="EC2 Instances", count=8) == "EC2 Instances: 8 items"

    def test_action_messages(self):
        assert t("browser.action_done", lang="en", label="stop", id="i-123") == "Successfully initiated stop for i-123"
        assert (
            t("browser.action_failed", lang="en", label="stop", id="i-123", detail="denied")
            == "Failed to stop i-123: denied"
        )

    def test_missing_key_returns_key(self):
        assert t("browser.does_not_exist") == "browser.does_not_exist"

    def test_missing_kwargs_left_unformatted(self):
        """Missing format arguments leave the template as is"""
        assert t("browser.error", lang="en", other="x") == "Error: {detail}"

    def test_unsupported_lang_argument(self):
        assert t("browser.cancelled", lang="fr") == "취소됨"

    def test_cli_namespace(self):
        assert t("cli.version_line", lang="en", version="1.2.3") == "a9s version 1.2.3"


# =============================================================================
# Message Completeness
# =============================================================================


class TestMessageCompleteness:
    def test_namespaces(self):
        prefixes = {key.split(".", 1)[0] for key in MESSAGES}
        assert prefixes == {"browser", "cli"}

    @pytest.mark.parametrize("key", sorted(MESSAGES))
    def test_all_languages_present(self, key):
        for lang in SUPPORTED_LANGS:
            assert MESSAGES[key].get(lang), f"{key} missing {lang}"

    @pytest.mark.parametrize("key", sorted(MESSAGES))
    def test_placeholders_match(self, key):
        """Both translations use the same placeholders"""
        formatter = string.Formatter()
        fields = [
            {name for _, name, _, _ in formatter.parse(MESSAGES[key][lang]) if name}
            for lang in SUPPORTED_LANGS
        ]
        assert fields[0] == fields[1], key
