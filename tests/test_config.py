from pathlib import Path

import pytest
from pydantic import ValidationError

from kverrors.config import Settings, get_settings


def test_settings_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(str(tmp_path))
    settings = Settings()
    assert settings.trim_caller_paths is True
    assert settings.diagnostics_level == "DEBUG"
    assert settings.traceback_limit == 6


def test_settings_reads_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env = tmp_path / ".env"
    env.write_text(
        "\n".join(
            [
                "KVERRORS_TRIM_CALLER_PATHS=no",
                "KVERRORS_DIAGNOSTICS_LEVEL=info",
                "KVERRORS_TRACEBACK_LIMIT=3",
                "UNRELATED=1",
            ]
        )
    )
    monkeypatch.chdir(str(tmp_path))
    settings = Settings()
    assert settings.trim_caller_paths is False
    assert settings.diagnostics_level == "INFO"
    assert settings.traceback_limit == 3


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", True),
        ("true", True),
        ("yes", True),
        ("0", False),
        ("no", False),
        ("", True),
    ],
)
def test_trim_caller_paths_variants(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
) -> None:
    monkeypatch.setenv("KVERRORS_TRIM_CALLER_PATHS", value)
    assert Settings().trim_caller_paths is expected


def test_traceback_limit_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KVERRORS_TRACEBACK_LIMIT", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    "value, expected",
    [("info", "INFO"), ("Warning", "WARNING"), ("bogus", "DEBUG"), ("", "DEBUG")],
)
def test_diagnostics_level_must_be_a_loguru_level(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: str
) -> None:
    monkeypatch.setenv("KVERRORS_DIAGNOSTICS_LEVEL", value)
    assert Settings().diagnostics_level == expected
