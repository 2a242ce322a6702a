"""Class-file lifecycle managers used during a single incremental compilation run."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from pathlib import Path
import logging
import shutil
import tempfile

logger = logging.getLogger(__name__)


class ClassfileManager(ABC):
    """Decides when compiled output files are deleted or replaced during a run."""

    @abstractmethod
    def delete(self, paths: Iterable[Path]) -> None:
        """Called before the compiler runs with class files that are about to be invalidated."""

    @abstractmethod
    def generated(self, paths: Iterable[Path]) -> None:
        """Called once the compiler has written new class files."""

    @abstractmethod
    def complete(self, success: bool) -> None:
        """Called exactly once when the run finishes."""


ClassfileManagerFactory = Callable[[], ClassfileManager]


def _delete_files_and_empty_dirs(paths: Iterable[Path]) -> None:
    parents: set[Path] = set()
    for path in paths:
        path.unlink(missing_ok=True)
        parents.add(path.parent)

    # Deepest directories first so a chain of empty parents collapses.
    for directory in sorted(parents, key=lambda p: len(p.parts), reverse=True):
        current = directory
        while current.is_dir() and not any(current.iterdir()):
            current.rmdir()
            current = current.parent


class DeleteImmediatelyManager(ClassfileManager):
    def delete(self, paths: Iterable[Path]) -> None:
        paths = [Path(p) for p in paths]
        logger.debug("Deleting %d class files", len(paths))
        _delete_files_and_empty_dirs(paths)

    def generated(self, paths: Iterable[Path]) -> None:
        pass

    def complete(self, success: bool) -> None:
        pass


def delete_immediately() -> ClassfileManager:
    """Canonical factory: invalidated class files are removed right away."""
    return DeleteImmediatelyManager()


class TransactionalManager(ClassfileManager):
    """Backs up deleted class files and restores them if the run fails.

    Files generated during a failed run are removed, so the output directory
    ends up exactly as it was before compilation started.
    """

    def __init__(self, backup_root: Path | None = None) -> None:
        self._backup_dir = Path(tempfile.mkdtemp(prefix="classfile-backup-", dir=backup_root))
        self._generated: set[Path] = set()
        self._moved: dict[Path, Path] = {}
        self._completed = False
        logger.debug("Created transactional classfile manager backed by %s", self._backup_dir)

    @property
    def backup_dir(self) -> Path:
        return self._backup_dir

    def delete(self, paths: Iterable[Path]) -> None:
        to_delete: list[Path] = []
        for path in (Path(p) for p in paths):
            if not path.exists():
                continue
            if path not in self._moved and path not in self._generated:
                backup = self._backup_dir / f"{len(self._moved)}-{path.name}"
                logger.debug("Backing up %s to %s", path, backup)
                shutil.copy2(path, backup)
                self._moved[path] = backup
            to_delete.append(path)
        _delete_files_and_empty_dirs(to_delete)

    def generated(self, paths: Iterable[Path]) -> None:
        self._generated.update(Path(p) for p in paths)

    def complete(self, success: bool) -> None:
        if self._completed:
            raise RuntimeError("complete() was already called on this classfile manager")
        self._completed = True
        if not success:
            logger.debug(
                "Rolling back: removing %d generated and restoring %d backed up class files",
                len(self._generated),
                len(self._moved),
            )
            try:
                _delete_files_and_empty_dirs(self._generated)
                for original, backup in self._moved.items():
                    original.parent.mkdir(parents=True, exist_ok=True)
                    shutil.move(str(backup), str(original))
            except OSError:
                # Leave the backups in place.
                logger.error("Rollback failed; class file backups kept in %s", self._backup_dir)
                raise
        shutil.rmtree(self._backup_dir, ignore_errors=True)


def transactional(backup_root: Path | str | None = None) -> ClassfileManagerFactory:
    """Return a factory of managers that roll back class files on failed runs.

    Each manager gets its own backup directory created under ``backup_root``
    (the system temp directory when omitted).
    """
    root = Path(backup_root) if backup_root is not None else None

    def factory() -> ClassfileManager:
        return TransactionalManager(root)

    return factory
