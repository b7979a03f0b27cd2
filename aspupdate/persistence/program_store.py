"""
File-backed storage of ELP programs.

Each program is stored as ``<name><suffix>`` inside a base directory.
Writes are atomic: content goes to a temporary file in the same directory
which then replaces the target.
"""

import os
import re
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, TextIO

from aspupdate.config import PersistenceConfig, config
from aspupdate.logging import get_component_logger
from aspupdate.symbolic import Program

log = get_component_logger("persistence")

_SAFE_NAME = re.compile(r"[^A-Za-z0-9_.-]+")


class PersistenceError(Exception):
    """Base exception for persistence operations."""

    pass


class ProgramStore:
    """
    Stores programs as text files.

    Public methods never raise for missing entries or I/O failures; they
    log the problem and return ``False`` or an empty string instead.

    Example:
        >>> store = ProgramStore(Path("programs"))
        >>> store.persist(program, "birds")
        True
        >>> store.load("birds").splitlines()[0]
        'bird(tweety).'
    """

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        persistence_config: Optional[PersistenceConfig] = None,
    ):
        settings = persistence_config or config.persistence
        self.base_dir = Path(base_dir) if base_dir is not None else settings.programs_path
        self.suffix = settings.file_suffix
        self.base_dir.mkdir(parents=True, exist_ok=True)
        log.debug(f"Program store at {self.base_dir}")

    def path_for(self, name: str) -> Path:
        """
        Path of the file holding program ``name``.

        Raises:
            PersistenceError: If the name is empty after sanitising
        """
        safe_name = _SAFE_NAME.sub("_", name.strip()).strip("._")
        if not safe_name:
            raise PersistenceError(f"Invalid program name: '{name}'")
        return self.base_dir / f"{safe_name}{self.suffix}"

    def persist(self, program: Program, name: Optional[str] = None) -> bool:
        """
        Write ``program`` under ``name`` (default: the program's name).

        An existing entry with the same name is overwritten.
        """
        if program is None or program.is_empty:
            log.warning("Refusing to persist an empty program")
            return False
        try:
            path = self.path_for(name or program.name)
            if path.exists():
                log.warning(f"Overwriting stored program {path.name}")
            with self._atomic_write(path) as f:
                f.write(program.to_asp())
                f.write("\n")
        except (OSError, PersistenceError) as e:
            log.error(f"Failed to persist program '{name or program.name}': {e}")
            return False

        log.info(f"Persisted program '{program.name}' to {path.name} ({len(program)} rules)")
        return True

    def load(self, name: str) -> str:
        """Return the stored text of ``name``, or "" if there is none."""
        try:
            path = self.path_for(name)
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.debug(f"No stored program named '{name}'")
            return ""
        except (OSError, PersistenceError) as e:
            log.error(f"Failed to load program '{name}': {e}")
            return ""

    def list_available(self) -> Dict[str, str]:
        """Map every stored program name to its text, sorted by name."""
        programs: Dict[str, str] = {}
        for path in sorted(self.base_dir.glob(f"*{self.suffix}")):
            try:
                programs[path.stem] = path.read_text(encoding="utf-8")
            except OSError as e:
                log.warning(f"Could not read {path.name}: {e}")
        return programs

    def delete(self, program: Program) -> bool:
        """Delete the stored entry named after ``program``."""
        if program is None:
            return False
        return self.delete_name(program.name)

    def delete_name(self, name: str) -> bool:
        try:
            self.path_for(name).unlink()
        except FileNotFoundError:
            log.debug(f"Nothing to delete for '{name}'")
            return False
        except (OSError, PersistenceError) as e:
            log.error(f"Failed to delete program '{name}': {e}")
            return False
        log.info(f"Deleted stored program '{name}'")
        return True

    def export(self, program: Program) -> Path:
        """
        Write ``program`` to a fresh temporary file outside the store.

        Raises:
            OSError: If the file cannot be written
        """
        fd, temp_path = tempfile.mkstemp(prefix=f"{program.name}_", suffix=self.suffix)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(program.to_asp())
            f.write("\n")
        return Path(temp_path)

    @contextmanager
    def _atomic_write(self, filepath: Path) -> Iterator[TextIO]:
        temp_fd, temp_path = tempfile.mkstemp(
            dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                yield f
            os.replace(temp_path, filepath)
        except Exception:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass
            raise
