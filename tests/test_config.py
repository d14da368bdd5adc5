"""Tests for settings and source configuration loading."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from leaderboard.config import Settings, SourceConfig, load_source_config


class TestLoadSourceConfig:
    """Tests for load_source_config."""

    def test_valid_config(self, tmp_path: Path) -> None:
        """Test a complete config file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "lmarena_csv_url": "https://example.com/a.csv",
            "helm_json_urls": ["https://example.com/h.json"],
        }))

        config = load_source_config(path)

        assert config.lmarena_csv_url == "https://example.com/a.csv"
        assert config.helm_json_urls == ["https://example.com/h.json"]

    def test_partial_config(self, tmp_path: Path) -> None:
        """Test optional fields default."""
        path = tmp_path / "config.json"
        path.write_text("{}")

        config = load_source_config(path)

        assert config.lmarena_csv_url is None
        assert config.helm_json_urls == []

    @pytest.mark.parametrize(
        "content",
        ["{not json", "[1, 2]", '{"helm_json_urls": "https://example.com/h.json"}', ""],
    )
    def test_invalid_config_is_empty(self, tmp_path: Path, content: str) -> None:
        """Test malformed files degrade to an empty config."""
        path = tmp_path / "config.json"
        path.write_text(content)

        assert load_source_config(path) == SourceConfig()

    def test_missing_config_is_empty(self, tmp_path: Path) -> None:
        """Test a missing file degrades to an empty config and warns."""
        with patch("leaderboard.config.logger") as mock_logger:
            config = load_source_config(tmp_path / "nope.json")

        assert config == SourceConfig()
        mock_logger.warning.assert_called_once()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default paths and dataset-server paging."""
        monkeypatch.delenv("OUTPUT_PATH", raising=False)
        monkeypatch.delenv("HF_MAX_ROWS", raising=False)
        settings = Settings(_env_file=None)

        assert settings.output_path == Path("data/aggregate.json")
        assert settings.hf_max_rows == 2000
        assert settings.http_timeout_read == 30.0

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variables override defaults."""
        monkeypatch.setenv("OUTPUT_PATH", "/tmp/out.json")
        monkeypatch.setenv("HF_PAGE_SIZE", "50")

        settings = Settings(_env_file=None)

        assert settings.output_path == Path("/tmp/out.json")
        assert settings.hf_page_size == 50
