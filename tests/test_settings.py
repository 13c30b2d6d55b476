"""Configuration loading and startup tests"""

import json

import pytest

from services.membership.app import main
from services.membership.app.db.connection import Settings, SettingsError, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PORT", "APP_PORT", "MEMBER_ROUTES", "MEMBERSHIP_DATABASE_URL", "APP_NAME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    def _write(content) -> None:
        path = tmp_path / "config.json"
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        monkeypatch.setenv("MEMBERSHIP_CONFIG_FILE", str(path))
    return _write


class TestSettings:

    def test_reads_config_file(self, write_config):
        write_config({
            "APP_NAME": "members-test",
            "APP_PORT": "9100",
            "DB": {
                "USERNAME": "svc",
                "PASSWORD": "pw",
                "HOST": "db.example.com",
                "PORT": "3307",
                "DB_NAME": "members",
                "KIND": "mysql",
            },
        })

        settings = load_settings(require_config_file=True)

        assert settings.APP_NAME == "members-test"
        assert settings.listen_port == 9100
        url = settings.database_url
        assert url.drivername == "mysql+pymysql"
        assert url.username == "svc"
        assert url.host == "db.example.com"
        assert url.port == 3307
        assert url.database == "members"

    def test_port_env_overrides_config(self, write_config, monkeypatch):
        write_config({"APP_PORT": "9100"})
        monkeypatch.setenv("PORT", "9200")

        assert load_settings().listen_port == 9200

    @pytest.mark.parametrize("profile, port", [("protected", 8001), ("open", 8000)])
    def test_default_port_by_profile(self, profile, port):
        assert Settings(MEMBER_ROUTES=profile).listen_port == port

    def test_database_url_override(self, write_config, monkeypatch):
        write_config({"DB": {"KIND": "mysql", "HOST": "db.example.com"}})
        monkeypatch.setenv("MEMBERSHIP_DATABASE_URL", "sqlite:///override.db")

        assert load_settings().database_url.get_backend_name() == "sqlite"

    def test_postgres_kind_selects_psycopg2(self):
        settings = Settings(DB={"KIND": "postgres", "HOST": "pg.example.com", "PORT": "5432"})

        url = settings.database_url

        assert url.drivername == "postgresql+psycopg2"
        assert url.port == 5432

    def test_unknown_db_kind(self):
        settings = Settings(DB={"KIND": "oracle"})

        with pytest.raises(ValueError):
            settings.database_url

    def test_missing_required_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MEMBERSHIP_CONFIG_FILE", str(tmp_path / "absent.json"))

        with pytest.raises(SettingsError):
            load_settings(require_config_file=True)

    def test_unparsable_file(self, write_config):
        write_config("{not json")

        with pytest.raises(SettingsError):
            load_settings(require_config_file=True)

    def test_invalid_value(self, write_config):
        write_config({"MEMBER_ROUTES": "sideways"})

        with pytest.raises(SettingsError):
            load_settings()


class TestRun:

    def test_exits_when_config_is_missing(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MEMBERSHIP_CONFIG_FILE", str(tmp_path / "absent.json"))
        monkeypatch.setattr(main.uvicorn, "run", _fail_if_called)

        with pytest.raises(SystemExit) as exc_info:
            main.run()

        assert exc_info.value.code == 1

    def test_exits_when_database_is_unreachable(self, write_config, monkeypatch, tmp_path):
        write_config({"DB": {"KIND": "sqlite", "DB_NAME": str(tmp_path / "missing" / "m.db")}})
        monkeypatch.setattr(main.uvicorn, "run", _fail_if_called)

        with pytest.raises(SystemExit) as exc_info:
            main.run()

        assert exc_info.value.code == 1

    def test_starts_server(self, write_config, monkeypatch, tmp_path):
        write_config({
            "APP_PORT": "9300",
            "DB": {"KIND": "sqlite", "DB_NAME": str(tmp_path / "m.db")},
        })
        engines = []
        real_build_engine = main.build_engine

        def recording_build_engine(settings):
            engines.append(real_build_engine(settings))
            return engines[-1]

        calls = []
        monkeypatch.setattr(main, "build_engine", recording_build_engine)
        monkeypatch.setattr(
            main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
        )

        main.run()

        assert len(calls) == 1
        app, kwargs = calls[0]
        assert kwargs["port"] == 9300
        assert app.url_path_for("health") == "/health"
        # 연결 확인에 쓴 엔진을 그대로 서빙에 사용
        assert len(engines) == 1
        assert app.state.engine is engines[0]
        engines[0].dispose()

    def test_exits_when_driver_is_not_installed(self, write_config, monkeypatch):
        write_config({"DB": {"KIND": "postgres"}})
        monkeypatch.setattr(main.uvicorn, "run", _fail_if_called)

        def missing_driver(settings):
            raise ModuleNotFoundError("No module named 'psycopg2'")

        monkeypatch.setattr(main, "build_engine", missing_driver)

        with pytest.raises(SystemExit) as exc_info:
            main.run()

        assert exc_info.value.code == 1

    def test_exits_on_non_hmac_algorithm(self, write_config, monkeypatch, tmp_path):
        write_config({
            "JWT_ALGORITHM": "RS256",
            "DB": {"KIND": "sqlite", "DB_NAME": str(tmp_path / "m.db")},
        })
        monkeypatch.setattr(main.uvicorn, "run", _fail_if_called)

        with pytest.raises(SystemExit) as exc_info:
            main.run()

        assert exc_info.value.code == 1


def _fail_if_called(*args, **kwargs):
    raise AssertionError("server must not start")
