"""Unit tests for factory functions in src/main.py and configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI

from src.config.loader import load_config
from src.config.settings import Settings
from src.utils.errors import ConfigurationError


def _settings(**overrides) -> Settings:
    defaults = {
        "_env_file": None,
        "skiddle_api_key": "",
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


class TestLoadConfig:
    def test_missing_yaml_uses_settings_defaults(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=_settings())
        assert config["search"]["max_page_size"] == 24
        assert config["search"]["genre_inflation_factor"] == 2
        assert config["cache"]["ttl"] == 3600
        assert config["app"]["env"] == "test"
        assert config["logging"]["level"] == "INFO"

    def test_yaml_values_survive_unset_settings(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "search:\n  genre_inflation_factor: 5\n  max_page_size: 10\ncache:\n  ttl: 60\n"
        )

        config = load_config(str(path), settings=_settings())

        assert config["search"]["genre_inflation_factor"] == 5
        assert config["search"]["max_page_size"] == 10
        assert config["search"]["default_page_size"] == 12
        assert config["cache"]["ttl"] == 60

    def test_explicit_settings_override_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("app:\n  name: findmyrave\nsearch:\n  genre_inflation_factor: 5\n  extra: 1\n")

        config = load_config(str(path), settings=_settings(genre_inflation_factor=3))

        assert config["app"]["name"] == "findmyrave"
        assert config["search"]["extra"] == 1
        assert config["search"]["genre_inflation_factor"] == 3

    def test_environment_variable_overrides_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("cache:\n  max_size: 50\n")
        monkeypatch.setenv("EVENT_CACHE_MAX_SIZE", "7")

        config = load_config(str(path), settings=_settings())

        assert config["cache"]["max_size"] == 7

    def test_repo_config_matches_settings_defaults(self, project_root: Path) -> None:
        config = load_config(str(project_root / "config" / "config.yaml"), settings=_settings())
        assert config["events"]["skiddle_api_base"] == "https://www.skiddle.com/api/v1"
        assert config["search"]["default_order"] == "trending"


class TestBuildAll:
    @pytest.mark.asyncio
    async def test_components_wired(self) -> None:
        from src.main import _build_all

        app_settings = _settings(skiddle_api_key="k", genre_inflation_factor=3)
        components = _build_all(load_config("absent.yaml", settings=app_settings), app_settings)
        try:
            assert components["search_service"].inflation_factor == 3
            assert components["provider_registry"] == {"skiddle": True}
            assert components["detail_service"].platforms == ["skiddle"]
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_unconfigured_provider_reported(self) -> None:
        from src.main import _build_all

        app_settings = _settings()
        components = _build_all(load_config("absent.yaml", settings=app_settings), app_settings)
        try:
            assert components["provider_registry"] == {"skiddle": False}
        finally:
            await components["http_client"].aclose()

    @pytest.mark.parametrize(
        ("default_size", "max_size"),
        [(0, 24), (30, 24)],
    )
    def test_invalid_page_sizes_rejected(self, default_size: int, max_size: int) -> None:
        from src.main import _build_all

        app_settings = _settings(
            search_default_page_size=default_size, search_max_page_size=max_size
        )
        with pytest.raises(ConfigurationError):
            _build_all(load_config("absent.yaml", settings=app_settings), app_settings)

    def test_invalid_inflation_factor_rejected(self) -> None:
        from src.main import _build_all

        app_settings = _settings(genre_inflation_factor=0)
        with pytest.raises(ConfigurationError):
            _build_all(load_config("absent.yaml", settings=app_settings), app_settings)


class TestCreateApp:
    def test_create_app_registers_routes(self) -> None:
        from src.main import create_app

        application = create_app()
        assert isinstance(application, FastAPI)
        paths = application.openapi()["paths"]
        assert "/api/v1/events/search" in paths
        assert "/api/v1/events/{platform}/{event_id}" in paths
        assert "/api/v1/genres" in paths
        assert "/api/v1/health" in paths
