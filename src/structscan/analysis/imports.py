"""Import extraction — normalized dependency lists.

L1 constraint: stdlib only.
"""

import re

_FROM_IMPORT = re.compile(r"^[ \t]*from[ \t]+([\w.]+)[ \t]+import\b", re.MULTILINE)
_BARE_IMPORT = re.compile(r"^[ \t]*import[ \t]+([^\n#;]+)", re.MULTILINE)


def extract_imports(source: str) -> list[str]:
    """Extract imported module paths from Python source.

    ``from a.b import x, y`` contributes ``a.b``; ``import a, b as c``
    contributes ``a`` and ``b``. Order of first appearance is preserved.

    Args:
        source: Python source code

    Returns:
        Deduplicated list of module paths (empty when there are no imports)
    """
    found: list[tuple[int, str]] = []

    for match in _FROM_IMPORT.finditer(source):
        found.append((match.start(), match.group(1)))

    for match in _BARE_IMPORT.finditer(source):
        for token in match.group(1).split(","):
            parts = token.split()
            if parts:
                found.append((match.start(), parts[0]))

    found.sort(key=lambda item: item[0])

    imports: list[str] = []
    seen: set[str] = set()
    for _, module in found:
        if module and module not in seen:
            seen.add(module)
            imports.append(module)
    return imports


def dependency_roots(imports: list[str]) -> list[str]:
    """Top-level package of each absolute import, deduplicated.

    Relative imports (``.models``) point inside the project and have no root.
    """
    roots: list[str] = []
    for module in imports:
        if module.startswith("."):
            continue
        root = module.split(".", 1)[0]
        if root and root not in roots:
            roots.append(root)
    return roots
