"""Line index and block boundaries.

L1 constraint: stdlib only.
"""

import re
from bisect import bisect_right

TAB_WIDTH = 4

# Only these end a line; splitlines() also breaks on \f, \v, \x1c-\x1e, \x85, \u2028, \u2029
LINE_BREAK = re.compile(r"\r\n|\r|\n")


class LineIndex:
    """Physical lines of a source text plus offset -> line lookup.

    Line-start offsets are computed once, so resolving a character offset
    is a binary search rather than a newline count from the top of the file.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.lines: list[str] = []
        self._starts: list[int] = []

        offset = 0
        for match in LINE_BREAK.finditer(text):
            self._starts.append(offset)
            self.lines.append(text[offset : match.start()])
            offset = match.end()
        if offset < len(text):
            self._starts.append(offset)
            self.lines.append(text[offset:])

    def __len__(self) -> int:
        return len(self.lines)

    def line_of(self, offset: int) -> int:
        """Return the 1-indexed line containing character ``offset``."""
        if not self._starts:
            return 1
        return max(bisect_right(self._starts, offset), 1)

    def slice(self, start: int, end: int) -> str:
        """Join 0-indexed lines ``start..end`` (inclusive) with newlines."""
        return "\n".join(self.lines[start : end + 1])


def indentation_width(line: str) -> int:
    """Width of leading whitespace: spaces count 1, tabs count 4."""
    width = 0
    for char in line:
        if char == " ":
            width += 1
        elif char == "\t":
            width += TAB_WIDTH
        else:
            break
    return width


def find_block_end(lines: list[str], start: int, indent: int) -> int:
    """Find the last line of the block opened at ``start``.

    The block runs until the first non-blank line indented at or below
    ``indent``; it ends on the line before that one. Blank lines never close
    a block on their own, so trailing blank lines belong to it.

    Args:
        lines: Physical source lines
        start: 0-indexed line of the block header
        indent: Indentation width of the header line

    Returns:
        0-indexed last line of the block (the last line of the file when
        nothing closes it)
    """
    for index in range(start + 1, len(lines)):
        line = lines[index]
        if not line.strip():
            continue
        if indentation_width(line) <= indent:
            return index - 1
    return max(len(lines) - 1, start)
