import pytest

import authform_detector.core.config as config_module  # type: ignore[import]

from tests.helpers.detector_imports import StrictnessMode, load_configuration

ENV_KEYS = ["AUTHFORM_MODE", "AUTHFORM_FETCH_TIMEOUT", "AUTHFORM_HISTORY", "AUTHFORM_MAX_THREADS"]


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_configuration_uses_environment(monkeypatch, tmp_path):
    history_path = tmp_path / "history.json"
    monkeypatch.setenv("AUTHFORM_MODE", "strict")
    monkeypatch.setenv("AUTHFORM_FETCH_TIMEOUT", "30")
    monkeypatch.setenv("AUTHFORM_HISTORY", str(history_path))
    monkeypatch.setenv("AUTHFORM_MAX_THREADS", "2")

    config = load_configuration(str(tmp_path / "report.json"))

    assert config.mode is StrictnessMode.STRICT
    assert config.policy.is_strict
    assert config.fetch_timeout == 30
    assert config.history_path == history_path.resolve()
    assert config.max_threads == 2
    assert config.report_path == (tmp_path / "report.json").resolve()


def test_load_configuration_defaults():
    config = load_configuration()

    assert config.mode is StrictnessMode.PERMISSIVE
    assert config.fetch_timeout == 15
    assert config.max_threads == 5
    assert config.report_path.name == "auth_form_report.json"


def test_explicit_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("AUTHFORM_MODE", "strict")
    monkeypatch.setenv("AUTHFORM_FETCH_TIMEOUT", "30")

    config = load_configuration(mode="permissive", fetch_timeout=5)

    assert config.mode is StrictnessMode.PERMISSIVE
    assert config.fetch_timeout == 5


def test_invalid_values_are_rejected(monkeypatch):
    monkeypatch.setenv("AUTHFORM_MODE", "paranoid")
    with pytest.raises(ValueError):
        load_configuration()

    monkeypatch.setenv("AUTHFORM_MODE", "strict")
    monkeypatch.setenv("AUTHFORM_FETCH_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        load_configuration()
