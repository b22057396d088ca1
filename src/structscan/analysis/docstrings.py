"""Docstring extraction from triple-quoted literals."""

import re

_OPENING = re.compile(r'^[rRuU]?("""|\'\'\')')


def extract_docstring(lines: list[str], index: int) -> str | None:
    """Extract the docstring starting on line ``index``, if there is one.

    A one-line literal returns its trimmed inner text. A multi-line literal
    joins its non-empty trimmed lines with single spaces, stopping at the
    line holding the closing delimiter.

    Args:
        lines: Physical source lines
        index: 0-indexed candidate line (usually the line after a header)

    Returns:
        Normalized docstring, or None when the line does not open one
    """
    if index < 0 or index >= len(lines):
        return None

    stripped = lines[index].strip()
    opening = _OPENING.match(stripped)
    if opening is None:
        return None

    delimiter = opening.group(1)
    rest = stripped[opening.end() :]

    if delimiter in rest:
        text = rest[: rest.index(delimiter)].strip()
        return text or None

    fragments = [rest.strip()]
    for line in lines[index + 1 :]:
        if delimiter in line:
            fragments.append(line[: line.index(delimiter)].strip())
            break
        fragments.append(line.strip())

    text = " ".join(fragment for fragment in fragments if fragment)
    return text or None
