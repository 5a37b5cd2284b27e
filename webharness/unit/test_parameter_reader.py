import os

import pytest
import yaml

from webharness.framework.parameter_reader import ParameterReader, load_session_config


pytestmark = pytest.mark.usefixtures("reset_parameter_reader")


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    # run_tests.py exports BROWSER_* overrides for the whole run
    for key in list(os.environ):
        if key.startswith(("BROWSER_", "CUSTOM_")) or key == "HARNESS_PARAMETERS":
            monkeypatch.delenv(key)


@pytest.fixture
def parameters_file(tmp_path):
    path = tmp_path / "parameters.yaml"
    path.write_text(
        yaml.dump(
            {
                "browser": {
                    "profile": "firefox",
                    "headless": "false",
                    "fullscreen": False,
                    "window_width": 1024,
                    "window_height": "768",
                    "wait_timeout": 10000,
                },
                "custom": {
                    "base_url": "http://localhost:3000",
                    "retry_limit": "3",
                    "feature_flag": "TRUE",
                    "broken_int": "three",
                },
            }
        ),
        encoding="utf-8",
    )
    return path


def test_browser_parameters(parameters_file):
    reader = ParameterReader(config_path=parameters_file)

    assert reader.get_profile() == "firefox"
    assert reader.get_headless() is False
    assert reader.get_fullscreen() is False
    assert reader.get_width() == 1024
    assert reader.get_height() == 768


def test_custom_values(parameters_file):
    reader = ParameterReader(config_path=parameters_file)

    assert reader.get_custom_string("base_url") == "http://localhost:3000"
    assert reader.get_custom_int("retry_limit") == 3
    assert reader.get_custom_boolean("feature_flag") is True


def test_missing_and_malformed_values_use_sentinels(parameters_file, log_records):
    reader = ParameterReader(config_path=parameters_file)

    assert reader.get_custom_boolean("missing") is False
    assert reader.get_custom_int("missing") == -1
    assert reader.get_custom_string("missing") is None
    assert reader.get_custom_int("broken_int") == -1

    messages = [r["message"] for r in log_records if r["level"].name == "WARNING"]
    assert any("custom.missing" in m for m in messages)
    assert any("custom.broken_int" in m for m in messages)


def test_env_override(parameters_file, monkeypatch):
    monkeypatch.setenv("BROWSER_HEADLESS", "True")
    monkeypatch.setenv("BROWSER_WINDOW_WIDTH", "1920")

    reader = ParameterReader(config_path=parameters_file)

    assert reader.get_headless() is True
    assert reader.get_width() == 1920


def test_missing_file_degrades_to_defaults(tmp_path):
    reader = ParameterReader(config_path=tmp_path / "absent.yaml")

    assert reader.get_profile() is None
    assert reader.get_headless() is False
    assert reader.get_width() == -1


def test_invalid_yaml_degrades_to_defaults(tmp_path):
    path = tmp_path / "parameters.yaml"
    path.write_text("browser: [unclosed\n", encoding="utf-8")

    reader = ParameterReader(config_path=path)

    assert reader.get_height() == -1


def test_undecodable_file_degrades_to_defaults(tmp_path, log_records):
    path = tmp_path / "parameters.yaml"
    path.write_bytes(b"browser:\n  profile: chr\xffome\n")

    reader = ParameterReader(config_path=path)

    assert reader.get_profile() is None
    assert any("issue parsing" in r["message"] for r in log_records if r["level"].name == "WARNING")


def test_directory_path_degrades_to_defaults(tmp_path):
    reader = ParameterReader(config_path=tmp_path)

    assert reader.get_width() == -1


def test_reader_is_loaded_once_per_process(parameters_file, tmp_path):
    first = ParameterReader(config_path=parameters_file)
    second = ParameterReader(config_path=tmp_path / "other.yaml")

    assert first is second
    assert second.get_profile() == "firefox"


def test_reload_updates_values(parameters_file):
    reader = ParameterReader(config_path=parameters_file)
    parameters_file.write_text(yaml.dump({"browser": {"profile": "edge"}}), encoding="utf-8")

    reader.reload()

    assert reader.get_profile() == "edge"


def test_parameters_path_from_environment(parameters_file, monkeypatch):
    monkeypatch.setenv("HARNESS_PARAMETERS", str(parameters_file))
    assert ParameterReader().get_profile() == "firefox"


def test_session_config_is_built_once_and_frozen(parameters_file):
    config = load_session_config(parameters_file)

    assert config.profile == "firefox"
    assert config.headless is False
    assert (config.width, config.height) == (1024, 768)
    assert config.wait_timeout == 10000
    assert config.executable_path is None
    assert config.custom["base_url"] == "http://localhost:3000"

    with pytest.raises(TypeError):
        config.custom["base_url"] = "http://elsewhere"
    with pytest.raises(AttributeError):
        config.headless = True


def test_custom_env_overrides_reach_session_config(parameters_file, monkeypatch):
    monkeypatch.setenv("CUSTOM_BASE_URL", "http://staging.test")
    monkeypatch.setenv("CUSTOM_LOCALE", "de-DE")

    config = load_session_config(parameters_file)

    assert config.custom["base_url"] == "http://staging.test"
    assert config.custom["locale"] == "de-DE"
    assert config.custom["retry_limit"] == "3"
