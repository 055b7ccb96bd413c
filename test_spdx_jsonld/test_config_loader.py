"""Tests for configuration loading."""

import logging
import os

import pytest

from spdx_jsonld.config import config_loader
from spdx_jsonld.config.config_loader import (
    ConfigurationError,
    SpdxJsonLdConfig,
    configure_logging,
    get_config,
    reload_config,
)

ENV_NAMES = ("SPDX_JSONLD_LATEST_VERSION", "SPDX_JSONLD_RESOURCE_DIR", "SPDX_JSONLD_PRETTY",
             "SPDX_JSONLD_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_loader, "_config_instance", None)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "spec:\n"
        "  latest_version: '3.0.1'\n"
        "serializer:\n"
        "  pretty: false\n"
        "app:\n"
        "  log_level: WARNING\n",
        encoding="utf-8")
    return path


def test_defaults_without_config_file():
    config = SpdxJsonLdConfig()

    assert config.config_path is None
    assert config.get_latest_version() == "3.0.1"
    assert config.get_resource_dir() is None
    assert config.get_serializer_config()['pretty'] is True
    assert config.get_deserializer_config()['document_uri_prefix'] == "urn:spdx-document:"
    config.validate_config()


def test_yaml_file_merged_with_defaults(config_file):
    config = SpdxJsonLdConfig(str(config_file))

    serializer_config = config.get_serializer_config()
    assert serializer_config['pretty'] is False
    assert serializer_config['generated_id_prefix'] == "https://generated-prefix/"
    assert config.get_app_config()['log_level'] == "WARNING"
    assert config.config_path == str(config_file.absolute())


def test_default_location_in_working_directory(tmp_path):
    (tmp_path / "spdx-jsonld-config.yaml").write_text("app:\n  log_level: ERROR\n", encoding="utf-8")

    config = SpdxJsonLdConfig()

    assert config.get_app_config()['log_level'] == "ERROR"


def test_environment_overrides(config_file, monkeypatch):
    monkeypatch.setenv("SPDX_JSONLD_PRETTY", "yes")
    monkeypatch.setenv("SPDX_JSONLD_LATEST_VERSION", "3.0.0")

    config = SpdxJsonLdConfig(str(config_file))

    assert config.get_serializer_config()['pretty'] is True
    assert config.get_latest_version() == "3.0.0"


def test_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SPDX_JSONLD_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    try:
        config = SpdxJsonLdConfig(env_file=str(env_file))
        assert config.get_app_config()['log_level'] == "DEBUG"
    finally:
        os.environ.pop("SPDX_JSONLD_LOG_LEVEL", None)


def test_missing_file():
    with pytest.raises(ConfigurationError):
        SpdxJsonLdConfig("/nonexistent/spdx-jsonld-config.yaml")


@pytest.mark.parametrize("content", ["- a\n- b\n", "spec: [unclosed\n"], ids=["not-a-mapping", "bad-yaml"])
def test_invalid_file(tmp_path, content):
    path = tmp_path / "broken.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        SpdxJsonLdConfig(str(path))


@pytest.mark.parametrize("env_name, value", [
    ("SPDX_JSONLD_LOG_LEVEL", "LOUD"),
    ("SPDX_JSONLD_LATEST_VERSION", "3"),
    ("SPDX_JSONLD_RESOURCE_DIR", "/nonexistent/resources"),
])
def test_validate_config_rejects(monkeypatch, env_name, value):
    monkeypatch.setenv(env_name, value)
    with pytest.raises(ConfigurationError):
        SpdxJsonLdConfig().validate_config()


def test_configure_logging(config_file):
    package_logger = logging.getLogger("spdx_jsonld")
    previous = package_logger.level
    try:
        configure_logging(SpdxJsonLdConfig(str(config_file)))
        assert package_logger.level == logging.WARNING
    finally:
        package_logger.setLevel(previous)


def test_global_config(config_file):
    reloaded = reload_config(str(config_file))

    assert get_config() is reloaded
    assert get_config().get_app_config()['log_level'] == "WARNING"
