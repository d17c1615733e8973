"""Scans the command line into a RunPlan.

The grammar is deliberately tiny: single-dash word options that may be
interleaved with the sources, and ``-o`` taking the next token as its value.
There is no ``--long`` form, no ``=value`` form and no ``--`` terminator.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .config import RunPlan

USAGE = """\
Usage: zipcli [options] source1 [source2 ...]
Options:
  -o output.zip    : Specify the output zip file (required if not -separate)
  -separate        : Zip each source separately to source.zip
  -nr              : Do not recurse into subfolders (default: recurse)
  -content         : For directories, zip only the contents without the folder name"""


class ArgumentError(ValueError):
    """Raised for any invocation that must be rejected before touching disk.

    An empty message means only the usage text should be shown.
    """


def parse_argv(argv: Sequence[str]) -> RunPlan:
    """Turns the raw argument vector into a validated RunPlan."""
    if not argv:
        raise ArgumentError("")

    sources: List[str] = []
    output: Optional[str] = None
    recursive = True
    content_only = False
    separate = False

    tokens = iter(argv)
    for arg in tokens:
        if not arg.startswith("-"):
            sources.append(arg)
        elif arg == "-nr":
            recursive = False
        elif arg == "-content":
            content_only = True
        elif arg == "-separate":
            separate = True
        elif arg == "-o":
            output = next(tokens, None)
            if output is None:
                raise ArgumentError("Missing argument for -o")
        else:
            raise ArgumentError(f"Unknown option: {arg}")

    if not sources:
        raise ArgumentError("No sources provided")
    if not separate and output is None:
        raise ArgumentError("Need -o output.zip when not using -separate")
    if separate and output is not None:
        raise ArgumentError("-o not supported with -separate")

    return RunPlan(
        sources=sources,
        output_path=output,
        recursive=recursive,
        content_only=content_only,
        separate=separate,
    )
