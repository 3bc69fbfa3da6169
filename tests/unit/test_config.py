"""
Runtime Configuration Unit Tests
Tests for core/config/runtime.py
"""
import json

import pytest

from core.config.runtime import (
    ApiConfig,
    RuntimeConfig,
    get_default_config,
    load_config,
    set_default_config,
)


class TestDefaults:
    """Defaults without files or environment."""

    def test_defaults(self, clean_env):
        config = RuntimeConfig.from_env()

        assert config.merkle.hash_algorithm == "sha256"
        assert config.merkle.allow_empty is True
        assert config.logging.log_level == "INFO"
        assert config.logging.log_file is None
        assert config.api == ApiConfig()

    def test_build_hasher(self):
        assert RuntimeConfig().merkle.build_hasher().algorithm == "sha256"


class TestEnvOverrides:
    """MERKLE_* environment variables."""

    def test_env_values(self, clean_env):
        clean_env.setenv("MERKLE_HASH_ALGORITHM", "blake2b")
        clean_env.setenv("MERKLE_ALLOW_EMPTY", "false")
        clean_env.setenv("MERKLE_LOG_LEVEL", "DEBUG")
        clean_env.setenv("MERKLE_API_PORT", "9001")
        clean_env.setenv("MERKLE_API_MAX_ELEMENTS", "10")

        config = RuntimeConfig.from_env()

        assert config.merkle.hash_algorithm == "blake2b"
        assert config.merkle.allow_empty is False
        assert config.logging.log_level == "DEBUG"
        assert config.api.port == 9001
        assert config.api.max_elements == 10

    @pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("off", False), ("0", False)])
    def test_bool_parsing(self, clean_env, raw, expected):
        clean_env.setenv("MERKLE_ALLOW_EMPTY", raw)
        assert RuntimeConfig.from_env().merkle.allow_empty is expected

    def test_env_overrides_file(self, clean_env, tmp_path):
        path = tmp_path / "merkle.json"
        path.write_text(json.dumps({"merkle": {"hash_algorithm": "sha512"}}))
        clean_env.setenv("MERKLE_HASH_ALGORITHM", "sha3_256")

        assert load_config(path).merkle.hash_algorithm == "sha3_256"

    def test_with_env_overrides_does_not_mutate(self, clean_env):
        base = RuntimeConfig()
        clean_env.setenv("MERKLE_LOG_LEVEL", "ERROR")

        overridden = base.with_env_overrides()

        assert overridden.logging.log_level == "ERROR"
        assert base.logging.log_level == "INFO"


class TestConfigFiles:
    """YAML and JSON config files."""

    def test_yaml(self, clean_env, tmp_path):
        path = tmp_path / "merkle.yaml"
        path.write_text(
            "merkle:\n"
            "  hash_algorithm: blake2s\n"
            "  allow_empty: false\n"
            "api:\n"
            "  max_elements: 50\n"
        )

        config = load_config(path)

        assert config.merkle.hash_algorithm == "blake2s"
        assert config.merkle.allow_empty is False
        assert config.api.max_elements == 50
        assert config.api.port == 8000

    def test_json(self, clean_env, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"logging": {"log_level": "WARNING"}}))

        assert load_config(path).logging.log_level == "WARNING"

    def test_empty_yaml(self, clean_env, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == RuntimeConfig()

    def test_missing_file_raises(self, clean_env, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_unknown_key_raises(self, tmp_path):
        with pytest.raises(TypeError):
            RuntimeConfig.from_dict({"merkle": {"bogus": 1}})

    def test_search_paths(self, clean_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "merkle.yaml").write_text("merkle:\n  hash_algorithm: sha512\n")

        assert load_config().merkle.hash_algorithm == "sha512"

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({"merkle": {"allow_empty": False}, "extra": {"k": "v"}})
        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestDefaultConfig:
    """Process-wide default configuration."""

    def test_set_and_reset(self):
        custom = RuntimeConfig.from_dict({"api": {"max_elements": 3}})
        set_default_config(custom)
        try:
            assert get_default_config() is custom
        finally:
            set_default_config(None)
