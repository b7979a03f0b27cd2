"""
Configuration management for aspupdate.

This module provides centralized configuration for all system components:
- Answer-set solver settings
- Update workflow behaviour
- Program storage
- Logging settings
"""

import os
from pathlib import Path
from typing import List, Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()


class SolverConfig(BaseModel):
    """Configuration for the answer-set solver (Clingo)."""

    timeout_seconds: float = Field(
        default=30.0, gt=0.0, description="Wall-clock limit for a single solve call"
    )
    max_models: int = Field(
        default=0, ge=0, description="Maximum number of answer sets (0 = all)"
    )
    clingo_args: List[str] = Field(
        default_factory=list, description="Extra command-line arguments for clingo"
    )


class UpdateConfig(BaseModel):
    """Configuration for the update-sequence workflow."""

    relabel_incoming: bool = Field(
        default=True,
        description="Re-label rules of appended programs to avoid label collisions",
    )
    score_solutions: bool = Field(
        default=True, description="Compute measures for every generated solution"
    )


class PersistenceConfig(BaseModel):
    """Configuration for stored programs."""

    programs_dir: str = Field(
        default="programs", description="Directory containing stored programs"
    )
    file_suffix: str = Field(default=".lp", description="Suffix of program files")

    @property
    def programs_path(self) -> Path:
        """Get absolute path to programs directory."""
        return Path(self.programs_dir).resolve()


class LogConfig(BaseModel):
    """Configuration for logging system."""

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> | "
        "<level>{message}</level>",
        description="Log message format",
    )
    rotation: str = Field(default="50 MB", description="Log file rotation size")
    retention: str = Field(default="2 weeks", description="Log file retention period")
    log_dir: str = Field(default="logs", description="Directory for log files")
    enable_file_logging: bool = Field(
        default=False, description="Whether to enable file logging"
    )
    enable_console_logging: bool = Field(
        default=True, description="Whether to enable console logging"
    )


class Config(BaseModel):
    """Main configuration object for aspupdate."""

    solver: SolverConfig = Field(default_factory=SolverConfig)
    update: UpdateConfig = Field(default_factory=UpdateConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            solver=SolverConfig(
                timeout_seconds=float(os.getenv("SOLVER_TIMEOUT", "30")),
                max_models=int(os.getenv("SOLVER_MAX_MODELS", "0")),
            ),
            update=UpdateConfig(
                relabel_incoming=_env_flag("UPDATE_RELABEL_INCOMING", True),
                score_solutions=_env_flag("UPDATE_SCORE_SOLUTIONS", True),
            ),
            persistence=PersistenceConfig(
                programs_dir=os.getenv("ASP_PROGRAMS_DIR", "programs"),
            ),
            logging=LogConfig(
                level=cast(
                    Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                    os.getenv("LOG_LEVEL", "INFO"),
                ),
                log_dir=os.getenv("LOG_DIR", "logs"),
                enable_file_logging=_env_flag("LOG_TO_FILE", False),
            ),
        )


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Global configuration instance
config = Config.from_env()
