"""
Unit tests for configuration loading.

Tests cover:
1. Defaults
2. Environment variables
3. dotenv files and precedence
"""

import os
from pathlib import Path

import pytest

from dap.core.config import PricingConfig, load_config

ENV_VARS = ("DAP_CHAIN_ID", "DAP_COSIGNER_KEY", "DAP_LOG_LEVEL", "DAP_LOG_DIR", "DAP_LOG_TO_FILE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep find_dotenv away from any .env in the real working directory
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv writes to os.environ directly
    for name in ENV_VARS:
        os.environ.pop(name, None)


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        cfg = load_config()
        assert cfg == PricingConfig()
        assert cfg.chain_id == 1
        assert cfg.cosigner_private_key is None
        assert cfg.log_to_file is False


class TestEnvironment:
    """Tests for environment variables."""

    def test_chain_id(self, monkeypatch):
        monkeypatch.setenv("DAP_CHAIN_ID", "10")
        assert load_config().chain_id == 10

    def test_chain_id_hex(self, monkeypatch):
        monkeypatch.setenv("DAP_CHAIN_ID", "0x2105")
        assert load_config().chain_id == 8453

    def test_logging(self, monkeypatch):
        monkeypatch.setenv("DAP_LOG_LEVEL", "debug")
        monkeypatch.setenv("DAP_LOG_DIR", "/tmp/dap-logs")
        monkeypatch.setenv("DAP_LOG_TO_FILE", "yes")
        cfg = load_config()
        assert cfg.log_level == "DEBUG"
        assert cfg.log_dir == Path("/tmp/dap-logs")
        assert cfg.log_to_file is True

    def test_flag_false(self, monkeypatch):
        monkeypatch.setenv("DAP_LOG_TO_FILE", "off")
        assert load_config().log_to_file is False


class TestDotenv:
    """Tests for .env files."""

    def test_explicit_file(self, tmp_path):
        env_file = tmp_path / "pricing.env"
        env_file.write_text("DAP_CHAIN_ID=137\nDAP_COSIGNER_KEY=0xabc\n")
        cfg = load_config(str(env_file))
        assert cfg.chain_id == 137
        assert cfg.cosigner_private_key == "0xabc"

    def test_environment_wins(self, tmp_path, monkeypatch):
        env_file = tmp_path / "pricing.env"
        env_file.write_text("DAP_CHAIN_ID=137\n")
        monkeypatch.setenv("DAP_CHAIN_ID", "42")
        assert load_config(str(env_file)).chain_id == 42
