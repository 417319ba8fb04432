"""Filesystem helpers shared by the config layer and the JSONL loggers.

Everything resorter-admin writes to disk (config.json, system and audit
logs) is private to the user running the server, so writes go through
restrict_to_owner.
"""

from __future__ import annotations

__all__ = [
    "get_app_dir",
    "read_model_file",
    "restrict_to_owner",
    "write_model_file",
]

import json
import sys
from pathlib import Path
from typing import TypeVar

import click
from pydantic import BaseModel, ValidationError

from resorter_admin.constants import APP_NAME

ModelT = TypeVar("ModelT", bound=BaseModel)

_OWNER_DIR_MODE = 0o700
_OWNER_FILE_MODE = 0o600


def get_app_dir() -> Path:
    """Directory holding config.json (click's per-user app dir for resorter-admin)."""
    return Path(click.get_app_dir(APP_NAME))


def restrict_to_owner(path: Path) -> None:
    """chmod a file to 0600 or a directory to 0700.

    No-op on Windows. Filesystems that refuse chmod (some mounts, FAT)
    leave the path as it is.
    """
    if sys.platform == "win32":
        return
    mode = _OWNER_DIR_MODE if path.is_dir() else _OWNER_FILE_MODE
    try:
        path.chmod(mode)
    except OSError:
        return


def _format_validation_error(error: ValidationError) -> str:
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "(root)"
        lines.append(f"  - {location}: {item['msg']}")
    return "\n".join(lines)


def read_model_file(
    path: Path,
    model_class: type[ModelT],
    *,
    description: str = "configuration",
    reset_hint: str | None = None,
) -> ModelT:
    """Read a JSON file and validate it into ``model_class``.

    Args:
        path: File to read.
        model_class: Pydantic model the document must satisfy.
        description: Human name for the file, used in error messages.
        reset_hint: Appended to validation errors, e.g. how to regenerate the file.

    Raises:
        FileNotFoundError: File is absent (message suggests ``config init``).
        ValueError: File is unreadable, not JSON, or fails validation.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"{description.capitalize()} file not found at {path}.\n"
            f"Run '{APP_NAME} config init' to create one."
        )

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {description} file {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {description} file {path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        message = f"Invalid {description} in {path}:\n{_format_validation_error(e)}"
        if reset_hint:
            message += f"\n\n{reset_hint}"
        raise ValueError(message) from e


def write_model_file(path: Path, model: BaseModel) -> None:
    """Write ``model`` as indented JSON, creating owner-only parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    restrict_to_owner(path.parent)
    path.write_text(json.dumps(model.model_dump(mode="json"), indent=2) + "\n", encoding="utf-8")
    restrict_to_owner(path)
