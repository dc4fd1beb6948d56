#!/usr/bin/env python3
"""
Source file loading shared by both command-line programs.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import InputReadError

logger = logging.getLogger("stunt.source")

READ_FAILURE_MESSAGE = "Failed to read input file"


@dataclass
class SourceFile:
    filename: str
    content: str


def read_source(path: Union[str, Path]) -> SourceFile:
    """
    Read a whole file as UTF-8 text.

    Raises InputReadError if the file is missing, unreadable or not valid
    UTF-8. The file handle is closed on every path.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {path}: {e}")
        raise InputReadError(READ_FAILURE_MESSAGE) from e

    logger.debug(f"Read {len(content)} characters from {path}")
    return SourceFile(filename=str(path), content=content)
