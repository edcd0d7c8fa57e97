import logging
import os

import pytest

from envtoml.adapters.env_provider import (
    DotenvEnvironmentSource,
    OsEnvironmentSource,
    StaticEnvironmentSource,
)


@pytest.fixture(autouse=True)
def reset_logging_handlers():
    # Keep test logging deterministic and avoid leaking handlers between tests.
    logging.getLogger("envtoml.adapters.env_provider").handlers = []


def test_os_snapshot_returns_env_value(monkeypatch):
    monkeypatch.setenv("ENVTOMLTEST_PORT", "8080")

    env = OsEnvironmentSource().snapshot()

    assert env["ENVTOMLTEST_PORT"] == "8080"


def test_os_snapshot_is_a_copy(monkeypatch):
    monkeypatch.setenv("ENVTOMLTEST_PORT", "8080")
    env = OsEnvironmentSource().snapshot()

    monkeypatch.setenv("ENVTOMLTEST_PORT", "9090")

    assert env["ENVTOMLTEST_PORT"] == "8080"
    assert os.environ["ENVTOMLTEST_PORT"] == "9090"


def test_static_source_copies_input():
    variables = {"APP_PORT": "1"}
    source = StaticEnvironmentSource(variables)
    variables["APP_PORT"] = "2"

    assert source.snapshot() == {"APP_PORT": "1"}


def test_dotenv_source_reads_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        '# comment\nAPP_PORT=8080\nAPP_DB__HOST="localhost"\nexport APP_DB__USER=admin\nAPP_EMPTY\n',
        encoding="utf-8",
    )

    env = DotenvEnvironmentSource(env_file).snapshot()

    assert env == {
        "APP_PORT": "8080",
        "APP_DB__HOST": "localhost",
        "APP_DB__USER": "admin",
        "APP_EMPTY": "",
    }


def test_dotenv_source_does_not_touch_os_environ(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("ENVTOMLTEST_ONLY_IN_FILE=1\n", encoding="utf-8")

    DotenvEnvironmentSource(env_file).snapshot()

    assert "ENVTOMLTEST_ONLY_IN_FILE" not in os.environ


def test_dotenv_overlay_lets_file_win(tmp_path, monkeypatch):
    monkeypatch.setenv("ENVTOMLTEST_PORT", "1")
    monkeypatch.setenv("ENVTOMLTEST_HOST", "from-os")
    env_file = tmp_path / ".env"
    env_file.write_text("ENVTOMLTEST_PORT=2\n", encoding="utf-8")

    env = DotenvEnvironmentSource(env_file, overlay_os=True).snapshot()

    assert env["ENVTOMLTEST_PORT"] == "2"
    assert env["ENVTOMLTEST_HOST"] == "from-os"


def test_dotenv_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError) as exc:
        DotenvEnvironmentSource(tmp_path / "missing.env").snapshot()

    assert "missing.env" in str(exc.value)


def test_dotenv_values_are_not_interpolated_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv("ENVTOMLTEST_SECRET_PART", "LEAKED")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "APP_PASSWORD=ab${ENVTOMLTEST_SECRET_PART}cd\nAPP_URL=${APP_HOST}/x\nAPP_HOST=h\n",
        encoding="utf-8",
    )

    env = DotenvEnvironmentSource(env_file).snapshot()

    assert env["APP_PASSWORD"] == "ab${ENVTOMLTEST_SECRET_PART}cd"
    assert env["APP_URL"] == "${APP_HOST}/x"


def test_dotenv_interpolation_is_opt_in(tmp_path, monkeypatch):
    monkeypatch.setenv("ENVTOMLTEST_SECRET_PART", "LEAKED")
    env_file = tmp_path / ".env"
    env_file.write_text("APP_PASSWORD=ab${ENVTOMLTEST_SECRET_PART}cd\n", encoding="utf-8")

    env = DotenvEnvironmentSource(env_file, interpolate=True).snapshot()

    assert env["APP_PASSWORD"] == "abLEAKEDcd"
