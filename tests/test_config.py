from pathlib import Path

import pytest

from probviz.config import ConfigError, ServerConfig, load_config, load_yaml_config


def test_defaults_without_sources() -> None:
    config = load_config(env={})
    assert config == ServerConfig()
    assert config.port == 5000
    assert config.cors_origins == ("*",)


def test_port_from_environment() -> None:
    assert load_config(env={"PORT": "8080"}).port == 8080


def test_yaml_file_then_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "server.yaml"
    config_path.write_text(
        """
server:
  host: 127.0.0.1
  port: 6000
  log_level: DEBUG
  cors_origins: http://localhost:3000
""",
        encoding="utf-8",
    )
    config = load_config(config_path, env={})
    assert config.host == "127.0.0.1"
    assert config.port == 6000
    assert config.log_level == "debug"
    assert config.cors_origins == ("http://localhost:3000",)

    overridden = load_config(config_path, env={"PORT": "7000", "PROBVIZ_HOST": "0.0.0.0"})
    assert overridden.port == 7000
    assert overridden.host == "0.0.0.0"
    assert overridden.log_level == "debug"


def test_config_path_from_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "env.yaml"
    config_path.write_text("server:\n  port: 5123\n", encoding="utf-8")
    assert load_config(env={"PROBVIZ_CONFIG": str(config_path)}).port == 5123


def test_missing_yaml_file_is_skipped(tmp_path: Path) -> None:
    config = load_yaml_config(tmp_path / "absent.yaml")
    assert config == ServerConfig()


@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_invalid_port_rejected(port: str) -> None:
    with pytest.raises(ConfigError):
        load_config(env={"PORT": port})


def test_malformed_yaml_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("server: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_config(config_path)


def test_non_mapping_section_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "list.yaml"
    config_path.write_text("server:\n  - 1\n  - 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_config(config_path)
