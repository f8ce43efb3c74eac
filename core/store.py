"""Project store - holds the one resident project and its save path."""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from pydantic import ValidationError

from config.settings import Settings, settings as default_settings
from models.project import Project
from core.errors import NoActiveProjectError, NoPathError, ParseError, StoreIOError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` to a sibling temp file, then move it over ``path``."""
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=path.parent,
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


class ProjectStore:
    """
    Mutex-guarded holder of at most one loaded project.

    One lock covers the (project, path) pair, so only one operation runs
    against the store at a time. Callers always get copies; the live project
    is only reachable inside :meth:`transaction`.

    Usage:
        store = ProjectStore()
        store.create("Demo")
        with store.transaction() as project:
            project.name = "Renamed"
        store.save_as("demo.json", store.get_current())
    """

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or default_settings
        self._lock = threading.Lock()
        self._project: Optional[Project] = None
        self._path: Optional[Path] = None

    @property
    def path(self) -> Optional[Path]:
        """Path the resident project was loaded from or saved to."""
        with self._lock:
            return self._path

    def create(self, name: str) -> Project:
        """Replace the resident project with a fresh, unsaved one."""
        project = Project.create(
            name=name,
            width=self.settings.canvas_width,
            height=self.settings.canvas_height,
        )
        with self._lock:
            self._project = project
            self._path = None
        logger.info(f"Created project '{name}'")
        return project.model_copy(deep=True)

    def get_current(self) -> Optional[Project]:
        """Copy of the resident project, or None."""
        with self._lock:
            if self._project is None:
                return None
            return self._project.model_copy(deep=True)

    def load(self, path: PathLike) -> Project:
        """
        Load a project file and make it resident.

        Raises:
            StoreIOError: If the file cannot be read.
            ParseError: If the file is not a valid project document.
        """
        path = Path(path)
        with self._lock:
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                raise StoreIOError(f"Failed to read {path}: {e}") from e
            except UnicodeDecodeError as e:
                raise ParseError(f"{path} is not UTF-8 text: {e}") from e

            try:
                project = Project.from_json(text)
            except json.JSONDecodeError as e:
                raise ParseError(f"{path} is not valid JSON: {e}") from e
            except ValidationError as e:
                raise ParseError(f"{path} is not a valid project file: {e}") from e

            self._project = project
            self._path = path

        logger.info(f"Loaded project '{project.name}' from {path}")
        return project.model_copy(deep=True)

    def save_as(self, path: PathLike, project: Project) -> None:
        """
        Make ``project`` resident, remember ``path`` and write it there.

        The in-memory update stays in place when the write fails.

        Raises:
            StoreIOError: If the file cannot be written.
        """
        path = Path(path)
        with self._lock:
            self._project = project.model_copy(deep=True)
            self._path = path
            self._write(path, self._project)

    def save(self, project: Project) -> str:
        """
        Write ``project`` to the remembered path.

        Returns:
            Confirmation message naming the path

        Raises:
            NoPathError: If no path has been recorded yet.
            StoreIOError: If the file cannot be written.
        """
        with self._lock:
            if self._path is None:
                raise NoPathError()
            self._project = project.model_copy(deep=True)
            self._write(self._path, self._project)
            return f"Project saved to {self._path}"

    @contextmanager
    def transaction(self) -> Iterator[Project]:
        """
        Hold the store lock and yield the live project for in-place changes.

        Raises:
            NoActiveProjectError: If no project is loaded.
        """
        with self._lock:
            if self._project is None:
                raise NoActiveProjectError()
            yield self._project

    @contextmanager
    def locked_path(self) -> Iterator[Optional[Path]]:
        """Hold the store lock while working with the recorded save path."""
        with self._lock:
            yield self._path

    def _write(self, path: Path, project: Project) -> None:
        text = project.to_json(indent=self.settings.json_indent)
        try:
            write_text_atomic(path, text)
        except OSError as e:
            raise StoreIOError(f"Failed to write {path}: {e}") from e
        logger.info(f"Project saved to {path}")
