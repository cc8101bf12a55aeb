"""Tests for FactoryConfig."""

import pytest
from pydantic import ValidationError

from trellis.config import FactoryConfig

ENV_NAMES = ["TRELLIS_SEED", "TRELLIS_LOCALE", "TRELLIS_BRANCH_POLICY", "TRELLIS_KEY_NAME"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


class TestFactoryConfig:
    def test_defaults(self):
        config = FactoryConfig()

        assert config.seed is None
        assert config.locale == "en_US"
        assert config.branch_policy == "latest"
        assert config.key_name == "id"

    def test_invalid_branch_policy(self):
        with pytest.raises(ValidationError):
            FactoryConfig(branch_policy="first")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TRELLIS_SEED", "42")
        monkeypatch.setenv("TRELLIS_LOCALE", "de_DE")
        monkeypatch.setenv("TRELLIS_BRANCH_POLICY", "all")
        monkeypatch.setenv("TRELLIS_KEY_NAME", "pk")
        monkeypatch.setenv("UNRELATED", "x")

        config = FactoryConfig()

        assert config.seed == 42
        assert config.locale == "de_DE"
        assert config.branch_policy == "all"
        assert config.key_name == "pk"

    def test_arguments_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("TRELLIS_SEED", "42")
        assert FactoryConfig(seed=7).seed == 7

    def test_empty_values_are_ignored(self, monkeypatch):
        monkeypatch.setenv("TRELLIS_SEED", "")
        assert FactoryConfig().seed is None

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("TRELLIS_BRANCH_POLICY", "first")
        with pytest.raises(ValidationError):
            FactoryConfig()
