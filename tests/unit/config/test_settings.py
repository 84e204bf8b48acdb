"""Tests for application settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from searchbridge.config.settings import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.observability.debug is False
        assert settings.solr.base_url == "http://localhost:8983/solr"
        assert settings.solr.retrieve_data is False
        assert settings.observability.log_format == "json"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCHBRIDGE_SOLR__COLLECTION", "articles")
        monkeypatch.setenv("SEARCHBRIDGE_SOLR__RETRIEVE_DATA", "true")
        monkeypatch.setenv("SEARCHBRIDGE_OBSERVABILITY__DEBUG", "true")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.solr.collection == "articles"
        assert settings.solr.retrieve_data is True
        assert settings.observability.debug is True

    def test_base_url_normalized(self) -> None:
        settings = Settings(_env_file=None, solr={"base_url": "http://solr:8983/solr/"})  # type: ignore[call-arg]
        assert settings.solr.base_url == "http://solr:8983/solr"

    def test_from_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "searchbridge.yaml"
        config.write_text(
            "solr:\n"
            "  collection: external_docs\n"
            "  retrieve_data: true\n"
            "observability:\n"
            "  log_format: console\n"
        )
        settings = Settings.from_yaml(config)
        assert settings.solr.collection == "external_docs"
        assert settings.solr.retrieve_data is True
        assert settings.observability.log_format == "console"

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        config = tmp_path / "empty.yaml"
        config.write_text("")
        assert Settings.from_yaml(config).solr.collection == "documents"

    def test_from_yaml_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "missing.yaml")
