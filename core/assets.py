"""Asset import - copies files into the project's assets directory."""

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from core.errors import InvalidPathError, NoActiveProjectError, StoreIOError

logger = logging.getLogger(__name__)


def assets_dir_for(project_path: Optional[Path], dir_name: str = "assets") -> Path:
    """
    Resolve the assets directory that sits next to a project file.

    Raises:
        NoActiveProjectError: If the project has never been saved.
        InvalidPathError: If the project path has no parent directory.
    """
    if project_path is None:
        raise NoActiveProjectError()
    if not project_path.name:
        raise InvalidPathError(f"Invalid project path: {project_path}")
    return project_path.parent / dir_name


def import_asset(
    project_path: Optional[Path],
    source_path: Union[str, Path],
    dir_name: str = "assets",
) -> str:
    """
    Copy ``source_path`` into the project's assets directory.

    An asset with the same name is overwritten.

    Args:
        project_path: Where the project file lives
        source_path: File to import
        dir_name: Name of the assets directory

    Returns:
        The bare filename used to reference the asset
    """
    assets_dir = assets_dir_for(project_path, dir_name)

    source = Path(source_path)
    filename = source.name
    if not filename or filename in (".", ".."):
        raise InvalidPathError(f"Invalid source filename: {source_path}")

    try:
        assets_dir.mkdir(exist_ok=True)
        shutil.copyfile(source, assets_dir / filename)
    except OSError as e:
        raise StoreIOError(f"Failed to import {source}: {e}") from e

    logger.info(f"Imported asset {filename} into {assets_dir}")
    return filename


def list_assets(project_path: Optional[Path], dir_name: str = "assets") -> list[str]:
    """Names of the regular files directly inside the assets directory."""
    assets_dir = assets_dir_for(project_path, dir_name)
    if not assets_dir.exists():
        return []

    try:
        return sorted(entry.name for entry in assets_dir.iterdir() if entry.is_file())
    except OSError as e:
        raise StoreIOError(f"Failed to list {assets_dir}: {e}") from e
