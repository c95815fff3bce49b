"""Tests for Settings environment loading."""

import pytest

from factcheck_system.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LLM_PROVIDER", "SEARCH_PROVIDER", "SERPER_API_KEY", "SERPER_KEY", "BING_API_KEY",
        "BING_KEY", "SERPAPI_API_KEY", "SERP_API_KEY", "SERPAPI_KEY", "EXTRA_TRUSTED_DOMAINS",
        "MAX_CLAIMS", "LLM_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.llm_provider == "openai"
        assert settings.search_provider == "serper"
        assert settings.max_claims == 2
        assert settings.max_results == 6
        assert settings.llm_timeout == 40
        assert settings.search_timeout == 15
        assert settings.request_timeout == 60
        assert settings.page_text_limit == 40000

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_PROVIDER", "bing")
        monkeypatch.setenv("BING_API_KEY", "b-key")
        monkeypatch.setenv("MAX_CLAIMS", "3")

        settings = Settings(_env_file=None)

        assert settings.search_provider == "bing"
        assert settings.search_api_key() == "b-key"
        assert settings.max_claims == 3

    @pytest.mark.parametrize(
        "env_name, provider",
        [("SERPER_KEY", "serper"), ("BING_KEY", "bing"), ("SERP_API_KEY", "serpapi")],
    )
    def test_legacy_key_names(self, monkeypatch: pytest.MonkeyPatch, env_name: str, provider: str) -> None:
        monkeypatch.setenv("SEARCH_PROVIDER", provider)
        monkeypatch.setenv(env_name, "legacy")

        assert Settings(_env_file=None).search_api_key() == "legacy"

    def test_invalid_provider_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_PROVIDER", "duckduckgo")

        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_extra_trusted_domains(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRA_TRUSTED_DOMAINS", "lupa.news, , checamos.afp.com")

        assert Settings(_env_file=None).trusted_domain_extras() == ["lupa.news", "checamos.afp.com"]

    def test_non_positive_timeout_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_TIMEOUT", "0")

        with pytest.raises(ValueError):
            Settings(_env_file=None)

    @pytest.mark.parametrize("raw", ["Bing", " BING ", "bing"])
    def test_provider_names_case_insensitive(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("SEARCH_PROVIDER", raw)
        monkeypatch.setenv("BING_KEY", "x")
        monkeypatch.setenv("LLM_PROVIDER", " Gemini ")

        settings = Settings(_env_file=None)

        assert settings.search_provider == "bing"
        assert settings.search_api_key() == "x"
        assert settings.llm_provider == "gemini"
