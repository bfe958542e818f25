"""
Tests for EngineOptions, EnvHelper, logging and the view engine.
"""
import json
import logging
from pathlib import Path

import pytest

from sanicmvc.logging import JSONFormatter, LoggerConfig, SensitiveDataFilter, getLogger
from sanicmvc.support import EngineOptions, EnvHelper
from sanicmvc.view import ViewEngine

ENV_VARIABLES = (
    "APP_NAME", "APP_ENV", "VIEW_PATH", "VIEW_ENGINE", "STATIC_FILE_PATH",
    "DEFAULT_PAGE", "LOG_FORMAT", "LOG_FILE", "SHOW_CONSOLE_LOG",
)


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so values loaded from .env files are removed afterwards
    for variable in ENV_VARIABLES:
        monkeypatch.setenv(variable, "")
        monkeypatch.delenv(variable)
    return monkeypatch


class TestEngineOptions:

    def test_defaults(self):
        options = EngineOptions()

        assert options.view_path == "views"
        assert options.static_file_path == "public"
        assert options.middlewares == ()
        assert options.is_development

    def test_middlewares_are_frozen_into_a_tuple(self):
        assert EngineOptions(middlewares=["auth"]).middlewares == ("auth",)

    def test_resolve_path(self, tmp_path):
        options = EngineOptions(base_path=tmp_path)

        assert options.resolve_path("views") == (tmp_path / "views").resolve()
        assert options.resolve_path("/srv/public") == Path("/srv/public")

    def test_from_env_reads_dotenv_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "APP_NAME=shop\n"
            "APP_ENV=production\n"
            "DEFAULT_PAGE=/home/index\n"
            "SHOW_CONSOLE_LOG=true\n"
        )
        options = EngineOptions.from_env(env_file, base_path=tmp_path)

        assert options.app_name == "shop"
        assert options.environment == "production"
        assert options.default_page == "/home/index"
        assert options.show_console_log is True
        assert options.base_path == tmp_path
        assert not options.is_development

    def test_overrides_win_over_environment(self, tmp_path, clean_env):
        clean_env.setenv("APP_ENV", "production")

        options = EngineOptions.from_env(tmp_path / "missing.env", environment="testing")

        assert options.environment == "testing"

    def test_missing_env_file_is_not_an_error(self, tmp_path, clean_env):
        assert EnvHelper.load(tmp_path / "missing.env") is False
        assert EnvHelper.path() == tmp_path / "missing.env"

    def test_get_bool(self, clean_env):
        clean_env.setenv("SHOW_CONSOLE_LOG", "Yes")
        assert EnvHelper.get_bool("SHOW_CONSOLE_LOG") is True
        assert EnvHelper.get_bool("NOT_SET_ANYWHERE", default=True) is True


class TestLogging:

    def test_get_logger_namespaces(self):
        assert getLogger().name == "sanicmvc"
        assert getLogger("access").name == "sanicmvc.access"
        assert getLogger("sanicmvc.routing.composer").name == "sanicmvc.routing.composer"
        assert getLogger("sanic.root").name == "sanic.root"

    def test_level_by_environment(self):
        assert LoggerConfig.get_level_by_environment("production") == logging.WARNING
        assert LoggerConfig.get_level_by_environment("Development") == logging.DEBUG
        assert LoggerConfig.get_level_by_environment("elsewhere") == logging.INFO

    def test_file_handler_stops_propagation(self, tmp_path):
        logger = LoggerConfig.setup_logger("sanicmvc-test-file", log_file=tmp_path / "logs" / "app.log")

        assert (tmp_path / "logs").is_dir()
        assert logger.propagate is False
        logger.handlers[0].close()

        bare = LoggerConfig.setup_logger("sanicmvc-test-file")
        assert bare.handlers == []
        assert bare.propagate is True

    def test_sensitive_data_is_redacted(self):
        record = logging.LogRecord(
            "sanicmvc.access", logging.INFO, __file__, 1,
            "%s %s", ("GET", "/login?user=ann&password=secret"), None,
        )

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == "GET /login?user=ann&password=[REDACTED]"

    def test_json_formatter_includes_extra_fields(self):
        record = logging.LogRecord("sanicmvc.error", logging.WARNING, __file__, 1, "404 Error", (), None)
        record.path = "/missing"

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["message"] == "404 Error"
        assert data["path"] == "/missing"


class TestViewEngine:

    def test_dotted_names_map_to_directories(self, tmp_path):
        engine = ViewEngine(tmp_path, "jinja")

        assert engine.template_name("home.index") == "home/index.jinja"
        assert engine.template_name("error.jinja") == "error.jinja"

    async def test_render_and_exists(self, tmp_path):
        (tmp_path / "greeting.html").write_text("Hi {{ name }}")
        engine = ViewEngine(tmp_path)

        assert engine.view_exists("greeting")
        assert not engine.view_exists("missing")
        assert await engine.render("greeting", {"name": "Ann"}) == "Hi Ann"
