"""ZIP writing for planned archive targets."""

from __future__ import annotations

import os
import shutil
import zipfile
from typing import Optional

from ..config import ArchiverConfig
from ..planner import ArchiveTarget, Member


class ZipExporter:
    """
    Streams the members of an ArchiveTarget into a ZIP file.

    Everything about the container itself (CRCs, headers, ZIP64 extensions)
    is left to :mod:`zipfile`. Entries get the writer's defaults: the current
    local time and zipfile's default permissions.
    """

    def __init__(self, config: Optional[ArchiverConfig] = None):
        self.config = config or ArchiverConfig()

    def export(self, target: ArchiveTarget) -> None:
        """
        Creates or truncates target.archive_path and writes every member in order.

        Any OSError propagates to the caller; the archive written so far is
        left on disk. The ZipFile is closed before the file it wraps.
        """
        with open(target.archive_path, "wb") as fh, zipfile.ZipFile(
            fh,
            "w",
            compression=self.config.compression.zip_constant,
            compresslevel=self.config.compresslevel,
        ) as zf:
            for member in target.members:
                self._add_member(zf, member)

    def _add_member(self, zf: zipfile.ZipFile, member: Member) -> None:
        # zipfile cannot grow an entry into ZIP64 after it has been opened,
        # so large members must ask for it up front.
        size = os.path.getsize(member.source_path)
        force_zip64 = size * 1.05 > zipfile.ZIP64_LIMIT

        with open(member.source_path, "rb") as src, zf.open(
            member.entry_name, "w", force_zip64=force_zip64
        ) as dst:
            shutil.copyfileobj(src, dst, self.config.chunk_size)
