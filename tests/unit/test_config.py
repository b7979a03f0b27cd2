"""
Unit tests for configuration management.
"""

import pytest
from pydantic import ValidationError

from aspupdate.config import (
    Config,
    LogConfig,
    PersistenceConfig,
    SolverConfig,
    UpdateConfig,
)


class TestSolverConfig:
    """Test solver configuration."""

    def test_defaults(self) -> None:
        """Default values are sensible."""
        solver = SolverConfig()
        assert solver.timeout_seconds == 30.0
        assert solver.max_models == 0
        assert solver.clingo_args == []

    def test_timeout_must_be_positive(self) -> None:
        """Non-positive timeouts are rejected."""
        with pytest.raises(ValidationError):
            SolverConfig(timeout_seconds=0)

    def test_max_models_cannot_be_negative(self) -> None:
        """Negative model limits are rejected."""
        with pytest.raises(ValidationError):
            SolverConfig(max_models=-1)


class TestOtherSections:
    """Test update, persistence and logging configuration."""

    def test_update_defaults(self) -> None:
        """Relabelling and scoring are enabled by default."""
        update = UpdateConfig()
        assert update.relabel_incoming is True
        assert update.score_solutions is True

    def test_programs_path_is_absolute(self) -> None:
        """The programs path resolves to an absolute path."""
        assert PersistenceConfig(programs_dir="programs").programs_path.is_absolute()

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            LogConfig(level="VERBOSE")


class TestConfigFromEnv:
    """Test loading configuration from environment variables."""

    def test_from_env(self, monkeypatch) -> None:
        """Environment variables override defaults."""
        monkeypatch.setenv("SOLVER_TIMEOUT", "5")
        monkeypatch.setenv("SOLVER_MAX_MODELS", "3")
        monkeypatch.setenv("ASP_PROGRAMS_DIR", "kb")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("UPDATE_SCORE_SOLUTIONS", "false")

        loaded = Config.from_env()

        assert loaded.solver.timeout_seconds == 5.0
        assert loaded.solver.max_models == 3
        assert loaded.persistence.programs_dir == "kb"
        assert loaded.logging.level == "DEBUG"
        assert loaded.update.score_solutions is False
        assert loaded.update.relabel_incoming is True

    def test_from_env_defaults(self, monkeypatch) -> None:
        """Without environment variables the defaults apply."""
        for name in ("SOLVER_TIMEOUT", "SOLVER_MAX_MODELS", "LOG_LEVEL", "LOG_TO_FILE"):
            monkeypatch.delenv(name, raising=False)

        loaded = Config.from_env()

        assert loaded.solver.timeout_seconds == 30.0
        assert loaded.logging.enable_file_logging is False
