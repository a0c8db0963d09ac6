"""Code emitter interfaces and implementations for generated output.

The generator hands emitters (module, role, content) triples; emitters own
path construction, directory creation and the overwrite policy.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from upath import UPath

from tidegen.exceptions import OutputError

logger = logging.getLogger(__name__)

FILE_SUFFIX = '.ts'


def relative_path(module: str | None, role: str) -> str:
    """Return the output path of a file relative to the output directory.

    Example:
        >>> relative_path('team', 'index')
        'team/index.ts'
        >>> relative_path(None, 'index')
        'index.ts'
    """
    filename = f'{role}{FILE_SUFFIX}'
    if module:
        return f'{module}/{filename}'
    return filename


class CodeEmitter(ABC):
    """Abstract base class for code emitters."""

    @abstractmethod
    def write(self, module: str | None, role: str, content: str) -> str:
        """Emit one generated file.

        Args:
            module: The module directory, or None for the output root.
            role: The file role, e.g. ``index`` or ``enum``.
            content: The file contents.

        Returns:
            A string identifying where the content went.

        Raises:
            OutputError: If the content cannot be emitted.
        """
        pass

    def prepare(self) -> None:
        """Called once before the first write."""
        pass


class FileEmitter(CodeEmitter):
    """Writes generated files below an output directory.

    Args:
        output_dir: Directory where files are written. Any path supported by
            universal-pathlib may be used.
        force: Remove the output directory before writing.
    """

    def __init__(self, output_dir: str | Path | UPath, force: bool = False):
        self.output_dir = UPath(output_dir)
        self.force = force
        self._written_files: list[str] = []

    def prepare(self) -> None:
        if self.force and self.output_dir.exists():
            logger.info(f'Removing existing output directory {self.output_dir}')
            self._remove_tree(self.output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(str(self.output_dir), cause=e)

    @staticmethod
    def _remove_tree(path: UPath) -> None:
        if isinstance(path, Path):
            shutil.rmtree(path)
        else:
            path.fs.rm(path.path, recursive=True)

    def write(self, module: str | None, role: str, content: str) -> str:
        path = self.output_dir / relative_path(module, role)
        if isinstance(path, Path) and not path.resolve().is_relative_to(
            self.output_dir.resolve()
        ):
            raise OutputError(
                str(path), cause=ValueError('path is outside the output directory')
            )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e)
        self._written_files.append(str(path))
        logger.info(f'Generated {path}')
        return str(path)

    @property
    def written_files(self) -> list[str]:
        return list(self._written_files)


class StringEmitter(CodeEmitter):
    """Keeps generated files in memory, keyed by relative path."""

    def __init__(self):
        self.files: dict[str, str] = {}

    def write(self, module: str | None, role: str, content: str) -> str:
        path = relative_path(module, role)
        self.files[path] = content
        return path
