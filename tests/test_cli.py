"""
Smoke test for the nodegrad CLI and its environment settings.

Runs via: pytest tests/test_cli.py -v
"""

import pytest
from pydantic import ValidationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """No NODEGRAD_* overrides leak in from the caller's environment."""
    import nodegrad
    for name in ("NODEGRAD_LOG_LEVEL", "NODEGRAD_UPDATE_RULE", "NODEGRAD_LEARNING_RATE"):
        monkeypatch.delenv(name, raising=False)
    nodegrad.reset()
    yield
    nodegrad.reset()


# ============================================================================
# SETTINGS
# ============================================================================

class TestSettings:
    def test_defaults(self):
        from nodegrad.cli.config import Settings
        s = Settings()
        assert s.log_level == "warning"
        assert s.update_rule == "accumulate"
        assert s.learning_rate == 0.01

    def test_env_override(self, monkeypatch):
        from nodegrad.cli.config import Settings
        monkeypatch.setenv("NODEGRAD_UPDATE_RULE", "sgd")
        monkeypatch.setenv("NODEGRAD_LEARNING_RATE", "0.25")
        monkeypatch.setenv("NODEGRAD_LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "debug"
        config = s.graph_config()
        assert config.update_rule == "sgd"
        assert config.learning_rate == 0.25

    def test_rejects_unknown_rule(self, monkeypatch):
        from nodegrad.cli.config import Settings
        monkeypatch.setenv("NODEGRAD_UPDATE_RULE", "adam")
        with pytest.raises(ValidationError):
            Settings()

    def test_rejects_non_positive_learning_rate(self, monkeypatch):
        from nodegrad.cli.config import Settings
        monkeypatch.setenv("NODEGRAD_LEARNING_RATE", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_rejects_unknown_log_level(self, monkeypatch):
        from nodegrad.cli.config import Settings
        monkeypatch.setenv("NODEGRAD_LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            Settings()


# ============================================================================
# RUN
# ============================================================================

class TestRun:
    def test_prints_demo_activation(self, capsys):
        from nodegrad.cli.main import run
        run()
        out = capsys.readouterr().out
        assert out.strip() == "-3.7"

    def test_installs_config(self, monkeypatch, capsys):
        import nodegrad
        from nodegrad.cli.main import run
        monkeypatch.setenv("NODEGRAD_UPDATE_RULE", "sgd")
        run()
        capsys.readouterr()
        assert nodegrad.get_config().update_rule == "sgd"
