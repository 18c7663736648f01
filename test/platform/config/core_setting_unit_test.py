from pathlib import Path

import pytest

from stagepass.platform.config.core_setting import Settings


ENV_EXAMPLE = Path(__file__).resolve().parents[3] / '.env.example'


@pytest.mark.unit
class TestSettings:
    @pytest.fixture(autouse=True)
    def _no_cors_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

    def test_loads_shipped_env_example(self) -> None:
        loaded = Settings(_env_file=str(ENV_EXAMPLE))  # type: ignore[call-arg]

        assert loaded.BACKEND_CORS_ORIGINS == ['http://localhost:3000', 'http://localhost:5173']

    def test_cors_from_comma_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', ' https://a.example , https://b.example ')

        loaded = Settings(_env_file=None)  # type: ignore[call-arg]

        assert loaded.BACKEND_CORS_ORIGINS == ['https://a.example', 'https://b.example']

    def test_cors_from_json_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["https://a.example"]')

        loaded = Settings(_env_file=None)  # type: ignore[call-arg]

        assert loaded.BACKEND_CORS_ORIGINS == ['https://a.example']

    def test_database_url_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('DATABASE_URL', 'sqlite+aiosqlite:///./local.db')

        loaded = Settings(_env_file=None)  # type: ignore[call-arg]

        assert loaded.DATABASE_URL_ASYNC == 'sqlite+aiosqlite:///./local.db'
        assert loaded.IS_SQLITE is True
