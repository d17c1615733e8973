"""Configuration schema for zipcli using Pydantic."""

from __future__ import annotations

import os
import zipfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, model_validator

CONFIG_ENV = "ZIPCLI_CONFIG"


class Compression(str, Enum):
    """Compression methods understood by the ZIP writer."""

    STORED = "stored"
    DEFLATED = "deflated"
    BZIP2 = "bzip2"
    LZMA = "lzma"

    @property
    def zip_constant(self) -> int:
        return {
            Compression.STORED: zipfile.ZIP_STORED,
            Compression.DEFLATED: zipfile.ZIP_DEFLATED,
            Compression.BZIP2: zipfile.ZIP_BZIP2,
            Compression.LZMA: zipfile.ZIP_LZMA,
        }[self]


class ArchiverConfig(BaseModel):
    """Writer settings shared by every archive of a run."""

    compression: Compression = Compression.DEFLATED
    """Compression method applied to every entry."""

    compresslevel: Optional[int] = Field(default=None, ge=0, le=9)
    """Passed through to zipfile; None keeps the method's default level."""

    chunk_size: int = Field(default=64 * 1024, ge=1024)
    """Buffer size in bytes used when streaming a member into its entry."""

    @model_validator(mode="after")
    def check_level(self) -> ArchiverConfig:
        if self.compression == Compression.BZIP2 and self.compresslevel == 0:
            raise ValueError("bzip2 compresslevel must be between 1 and 9")
        return self

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> ArchiverConfig:
        """Loads and validates an ArchiverConfig from a YAML file."""
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Config file not found: {path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML config: {e}")
        return cls.model_validate(data or {})

    @classmethod
    def load(cls) -> ArchiverConfig:
        """Reads the file named by $ZIPCLI_CONFIG, or returns the defaults."""
        path = os.environ.get(CONFIG_ENV)
        if not path:
            return cls()
        return cls.from_yaml(path)


@dataclass(frozen=True)
class RunPlan:
    """
    What a single invocation was asked to do.

    Sources come straight from argv and may carry surrogate-escaped bytes,
    which pydantic-core rejects as str, so this is not a pydantic model.
    """

    sources: List[str]
    output_path: Optional[str] = None
    recursive: bool = True
    content_only: bool = False
    separate: bool = False

    def __post_init__(self):
        if not self.sources:
            raise ValueError("at least one source is required")
        # exactly one of: a shared output archive, or one archive per source
        if self.separate == (self.output_path is not None):
            raise ValueError("exactly one of output_path or separate must be set")
