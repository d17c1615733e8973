"""The Planner turns a RunPlan into the archives to write and what goes in them."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

import click

from .config import RunPlan


@dataclass(frozen=True)
class Member:
    """A regular file on disk and the name it is stored under in the archive."""

    source_path: Path
    entry_name: str  # "/"-separated, never absolute


@dataclass(frozen=True)
class ArchiveTarget:
    """
    One archive to create or overwrite.
    This is the unit of work handed to the ZipExporter.
    """

    archive_path: Path
    members: Tuple[Member, ...] = ()


def source_name(path: str) -> str:
    """
    Returns the basename of a source the way the host names it.

    Trailing separators are ignored, and "." or ".." are resolved so the
    archive gets the directory's real name. A filesystem root has no name.
    """
    name = Path(path).name
    if name in ("", ".", ".."):
        name = Path(path).resolve().name
    return name


def _warn(message: str) -> None:
    click.secho(message, fg="yellow", err=True)


class Planner:
    """Classifies each source and derives the entry names of its members."""

    def __init__(self, plan: RunPlan):
        self.plan = plan

    def targets(self) -> Iterator[ArchiveTarget]:
        """
        Yields the archives to write, in order.

        In shared mode this is a single target collecting every source.
        In separate mode each existing file or directory gets its own
        ``<basename>.zip`` in the current directory, yielded as soon as that
        source has been walked so missing-source warnings stay interleaved
        with the archives being written.
        """
        if self.plan.separate:
            for source in self.plan.sources:
                name = source_name(source) or "root"
                archive_path = Path(name + ".zip")
                members = self._members_of(source, archive_path, "Not a file or directory")
                if members is not None:
                    yield ArchiveTarget(archive_path, tuple(members))
        else:
            archive_path = Path(self.plan.output_path)
            members: List[Member] = []
            for source in self.plan.sources:
                members.extend(self._members_of(source, archive_path, "Skipping") or ())
            yield ArchiveTarget(archive_path, tuple(members))

    def _members_of(
        self, source: str, archive_path: Path, other_message: str
    ) -> Optional[List[Member]]:
        """Returns the members of one source, or None if it was skipped."""
        if not os.path.exists(source):
            _warn(f"Source not found: {click.format_filename(source)}")
            return None

        path = Path(source)
        if os.path.isfile(source):
            if _same_file(path, archive_path):
                return []
            # a file whose name cannot be stored is skipped like any other source
            return _storable([Member(path, source_name(source))]) or None

        if os.path.isdir(source):
            name = source_name(source)
            base = "" if self.plan.content_only or not name else name + "/"
            return _storable(
                Member(file_path, base + relative)
                for file_path, relative in self._walk(path)
                if not _same_file(file_path, archive_path)
            )

        _warn(f"{other_message}: {click.format_filename(source)}")
        return None

    def _walk(self, top: Path) -> Iterator[Tuple[Path, str]]:
        """
        Yields (path, relative entry name) for the regular files beneath top.

        os.walk swallows listing errors, so an unreadable directory simply
        contributes nothing. Symlinked directories are followed wherever they
        appear, except into one of their own ancestors.
        """
        # os.walk root -> keys of that directory and everything above it
        top_key = _dir_key(top)
        ancestors: Dict[str, FrozenSet[Tuple[int, int]]] = {
            os.fspath(top): frozenset([top_key] if top_key else [])
        }
        for root, dirs, files in os.walk(top, followlinks=True):
            chain = ancestors.pop(root, frozenset())
            if not self.plan.recursive:
                dirs[:] = []
            else:
                kept = []
                for d in dirs:
                    key = _dir_key(Path(root) / d)
                    if key is None or key in chain:
                        continue
                    kept.append(d)
                    ancestors[os.path.join(root, d)] = chain | {key}
                dirs[:] = kept

            for file in files:
                file_path = Path(root) / file
                if _is_regular(file_path):
                    yield file_path, file_path.relative_to(top).as_posix()


def _storable(members: Iterable[Member]) -> List[Member]:
    """Drops members whose entry name cannot be written as UTF-8."""
    kept = []
    for member in members:
        try:
            member.entry_name.encode("utf-8")
        except UnicodeEncodeError:
            # undecodable bytes in a filename, carried as surrogate escapes
            _warn(f"Skipping: {click.format_filename(member.source_path)}")
            continue
        kept.append(member)
    return kept


def _is_regular(path: Path) -> bool:
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except OSError:
        # dangling symlink or vanished file
        return False


def _dir_key(path: Path) -> Optional[Tuple[int, int]]:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return st.st_dev, st.st_ino


def _same_file(path: Path, archive_path: Path) -> bool:
    return os.path.abspath(path) == os.path.abspath(archive_path)
