"""Declaration extraction — top-level classes and module-level functions."""

import re
from pathlib import PurePosixPath

from structscan.analysis.docstrings import extract_docstring
from structscan.analysis.lines import LineIndex, find_block_end
from structscan.analysis.members import extract_members, member_indentation
from structscan.analysis.models import CallSite, CodeTypeInfo, MemberKind, TypeKind

# The base list may wrap lines but never contains a colon, so an unclosed
# parenthesis cannot run on into the next declaration.
_CLASS_HEADER = re.compile(r"^class[ \t]+(\w+)[ \t]*(?:\(([^):]*)\))?[ \t]*:", re.MULTILINE)


def split_bases(raw: str | None) -> tuple[str | None, list[str]]:
    """Split a raw base list into (primary base, remaining bases)."""
    if not raw:
        return None, []
    bases = [" ".join(base.split()) for base in raw.split(",")]
    bases = [base for base in bases if base]
    if not bases:
        return None, []
    return bases[0], bases[1:]


def extract_types(index: LineIndex, file_path: str) -> tuple[list[CodeTypeInfo], list[CallSite]]:
    """Extract top-level class declarations with their methods.

    Only classes declared at column 0 are recognized; nested classes end up
    inside the body of whatever contains them.

    Args:
        index: Line index of the file
        file_path: File path recorded on call sites

    Returns:
        (types in source order, call sites observed in their methods)
    """
    lines = index.lines
    types: list[CodeTypeInfo] = []
    call_sites: list[CallSite] = []

    for match in _CLASS_HEADER.finditer(index.text):
        name = match.group(1)
        start = index.line_of(match.start()) - 1
        header_end = index.line_of(match.end() - 1) - 1
        end = find_block_end(lines, header_end, 0)
        base_type, interfaces = split_bases(match.group(2))

        members = []
        if header_end < end:
            indent = member_indentation(lines, header_end + 1, end)
            if indent:
                members, sites = extract_members(
                    lines,
                    header_end + 1,
                    end,
                    indent=indent,
                    owner=name,
                    kind=MemberKind.METHOD,
                    file_path=file_path,
                )
                call_sites.extend(sites)

        types.append(
            CodeTypeInfo(
                name=name,
                full_name=name,
                kind=TypeKind.CLASS,
                base_type=base_type,
                interfaces=interfaces,
                start_line=start + 1,
                end_line=end + 1,
                docstring=extract_docstring(lines, header_end + 1) if header_end < end else None,
                members=members,
            )
        )

    return types, call_sites


def extract_module_type(
    index: LineIndex, file_name: str, file_path: str
) -> tuple[CodeTypeInfo | None, list[CallSite]]:
    """Collect column-0 functions into a synthetic module container.

    Returns:
        (module container spanning the whole file, call sites), or
        (None, []) when the file has no module-level functions
    """
    lines = index.lines
    if not lines:
        return None, []

    name = PurePosixPath(file_name).stem
    members, call_sites = extract_members(
        lines,
        0,
        len(lines) - 1,
        indent=0,
        owner=name,
        kind=MemberKind.FUNCTION,
        file_path=file_path,
    )
    if not members:
        return None, []

    module_type = CodeTypeInfo(
        name=name,
        full_name=name,
        kind=TypeKind.MODULE,
        start_line=1,
        end_line=len(lines),
        members=members,
    )
    return module_type, call_sites
