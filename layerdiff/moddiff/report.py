# Copyright Red Hat
#
# layerdiff/moddiff/report.py - Module layer diff report rendering
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Module layer diff report rendering.

Report lines are indented by tree depth and carry a change marker:

```
~ module org.foo changed
  ~ org.foo
    - org.foo.Bar
    + org.foo.Baz
```
"""
from typing import Optional, TextIO
from enum import IntEnum
import sys
import os

from .difftypes import DiffType


class Depth(IntEnum):
    """
    Report tree depth of each entity level.
    """

    MODULE = 0
    PACKAGE = 1
    CLASS = 2


#: Spaces of indentation per level of depth
INDENT_WIDTH = 2

MARKERS = {
    DiffType.ADDED: "+",
    DiffType.REMOVED: "-",
    DiffType.MODIFIED: "~",
}


def format_line(depth: Depth, diff_type: DiffType, text: str) -> str:
    """
    Format a single newline terminated report line.

    :param depth: The tree depth of the entity the line describes.
    :type depth: ``Depth``
    :param diff_type: The kind of change.
    :type diff_type: ``DiffType``
    :param text: The line text following the change marker.
    :type text: ``str``
    :returns: The formatted report line.
    :rtype: ``str``
    """
    indent = " " * (INDENT_WIDTH * depth)
    return f"{indent}{MARKERS[diff_type]} {text}\n"


class DiffReport:
    """
    A composed module layer difference report.
    """

    def __init__(self, text: str):
        self.text: str = text

    def __str__(self):
        return self.text

    def __eq__(self, other):
        if not isinstance(other, DiffReport):
            return NotImplemented
        return self.text == other.text

    @property
    def empty(self) -> bool:
        """``True`` if the report contains no differences."""
        return not self.text

    def lines(self):
        """Return the report as a list of lines without line terminators."""
        return self.text.splitlines()

    def render(self, stream: Optional[TextIO] = None):
        """
        Write the report verbatim to ``stream``.

        Module names come from file system paths and may carry undecodable
        bytes as surrogate escapes. When ``stream`` is backed by a binary
        buffer the report is written there, re-encoded the way file names
        are, so those bytes are reproduced unchanged.

        :param stream: The stream to write to (default ``sys.stdout``).
        :type stream: ``Optional[TextIO]``
        """
        stream = stream or sys.stdout
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            stream.write(self.text)
            stream.flush()
            return
        stream.flush()
        buffer.write(os.fsencode(self.text))
        buffer.flush()


__all__ = [
    "Depth",
    "DiffReport",
    "format_line",
]
