"""Member extraction — functions and methods inside a block.

The block is scanned line by line. Decorator lines at the member column are
held as pending until a ``def`` header consumes them; once a header opens a
member, scanning resumes after that member's last line, so nested functions
and nested classes stay part of the member body.
"""

import re

from structscan.analysis.calls import extract_call_sites
from structscan.analysis.docstrings import extract_docstring
from structscan.analysis.lines import find_block_end, indentation_width
from structscan.analysis.models import (
    NO_RETURN_TYPE,
    CallSite,
    CodeMemberInfo,
    MemberKind,
    Visibility,
)

_HEADER_START = re.compile(r"^[ \t]*(?:async[ \t]+)?def[ \t]+\w+[ \t]*\(")
_HEADER = re.compile(
    r"^([ \t]*)(async[ \t]+)?def[ \t]+(\w+)[ \t]*\((.*?)\)[ \t]*(?:->[ \t]*(.+?))?[ \t]*:"
)
_DECORATOR = re.compile(r"^[ \t]*@([\w.]+)")

# Lines at the member column that do not cancel pending decorators:
# comments and the closing bracket of a wrapped decorator call.
_CONTINUATION_PREFIXES = ("#", ")", "]", "}")

# A signature may wrap onto this many continuation lines.
MAX_HEADER_LINES = 20

CLASS_REFERENCE = "cls"


def _read_header(lines: list[str], index: int, limit: int) -> tuple[re.Match[str], int] | None:
    """Match a def header starting on ``index``, following wrapped signatures.

    Returns:
        (header match, 0-indexed last header line), or None
    """
    if not _HEADER_START.match(lines[index]):
        return None

    text = lines[index].rstrip()
    last = index
    while True:
        header = _HEADER.match(text)
        if header is not None:
            return header, last
        last += 1
        if (
            last > limit
            or last - index >= MAX_HEADER_LINES
            or text.count("(") <= text.count(")")
            or _HEADER_START.match(lines[last])
        ):
            return None
        text = f"{text} {lines[last].strip()}"


def _parameter_name(parameter: str) -> str:
    return parameter.split(":", 1)[0].split("=", 1)[0].strip()


def member_indentation(lines: list[str], start: int, end: int) -> int | None:
    """Indentation of the first code line in ``start..end``, or None if empty."""
    for line in lines[start : end + 1]:
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return indentation_width(line)
    return None


def extract_members(
    lines: list[str],
    start: int,
    end: int,
    *,
    indent: int,
    owner: str,
    kind: MemberKind,
    file_path: str,
) -> tuple[list[CodeMemberInfo], list[CallSite]]:
    """Extract the members declared at column ``indent`` in ``start..end``.

    Args:
        lines: Physical source lines of the whole file
        start: 0-indexed first line to scan
        end: 0-indexed last line to scan (inclusive)
        indent: Indentation width members must be declared at
        owner: Name of the owning type (or module container)
        kind: METHOD for class bodies, FUNCTION for the module pass
        file_path: File path recorded on call sites

    Returns:
        (members in source order, call sites observed in their bodies)
    """
    members: list[CodeMemberInfo] = []
    call_sites: list[CallSite] = []
    pending: list[str] = []

    index = start
    while index <= end:
        line = lines[index]
        if not line.strip():
            index += 1
            continue

        width = indentation_width(line)
        if width != indent:
            if width < indent:
                pending = []
            index += 1
            continue

        decorator = _DECORATOR.match(line)
        if decorator is not None:
            pending.append(decorator.group(1))
            index += 1
            continue

        found = _read_header(lines, index, end)
        if found is None:
            if not line.lstrip().startswith(_CONTINUATION_PREFIXES):
                pending = []
            index += 1
            continue

        header, header_end = found
        member, sites = _build_member(
            lines,
            header,
            index,
            header_end,
            end,
            owner=owner,
            kind=kind,
            decorators=pending,
            file_path=file_path,
        )
        members.append(member)
        call_sites.extend(sites)
        pending = []
        index = member.end_line  # 1-indexed end == 0-indexed next line

    return members, call_sites


def _build_member(
    lines: list[str],
    header: re.Match[str],
    start: int,
    header_end: int,
    limit: int,
    *,
    owner: str,
    kind: MemberKind,
    decorators: list[str],
    file_path: str,
) -> tuple[CodeMemberInfo, list[CallSite]]:
    indent_text, async_kw, name, raw_params, returns = header.groups()
    indent = indentation_width(indent_text)

    parameters = [p.strip() for p in raw_params.split(",") if p.strip()]

    is_static = any(d.rsplit(".", 1)[-1] == "staticmethod" for d in decorators)
    if parameters and _parameter_name(parameters[0]) == CLASS_REFERENCE:
        is_static = True

    end = min(find_block_end(lines, header_end, indent), limit)
    docstring = extract_docstring(lines, header_end + 1) if header_end < end else None
    body = "\n".join(lines[start : end + 1])

    member = CodeMemberInfo(
        name=name,
        kind=kind,
        return_type=returns.strip() if returns else NO_RETURN_TYPE,
        is_async=async_kw is not None,
        is_static=is_static,
        visibility=Visibility.PRIVATE if name.startswith("_") else Visibility.PUBLIC,
        decorators=list(decorators),
        parameters=parameters,
        signature=f"{name}({', '.join(parameters)})",
        start_line=start + 1,
        end_line=end + 1,
        docstring=docstring,
        body=body,
    )

    sites = extract_call_sites(
        body,
        file_path=file_path,
        caller_type=owner,
        caller_member=name,
        first_line=start + 1,
    )
    return member, sites
