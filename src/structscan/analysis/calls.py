"""Call-site extraction and cross-file call graph aggregation.

Extraction is a token-adjacent-to-``(`` heuristic, not a resolver: keywords
written like calls are recorded, and calls made through aliases are missed.
"""

import logging
import re
import threading
from collections.abc import Iterable, Iterator

from structscan.analysis.lines import LineIndex
from structscan.analysis.models import CallSite

logger = logging.getLogger(__name__)

_CALL = re.compile(r"(?<![\w.])([A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\(")
_DECLARATION_PREFIX = re.compile(r"\b(?:def|class)\s+$")


def extract_call_sites(
    body: str,
    *,
    file_path: str,
    caller_type: str,
    caller_member: str,
    first_line: int = 1,
) -> list[CallSite]:
    """Find every ``name(`` / ``a.b.name(`` expression in a member body.

    Args:
        body: Member source, header line included
        file_path: File the member lives in
        caller_type: Owning type of the member
        caller_member: Member name
        first_line: 1-indexed file line of the first body line

    Returns:
        Call sites in order of appearance
    """
    index = LineIndex(body)
    sites: list[CallSite] = []

    for match in _CALL.finditer(body):
        line_start = body.rfind("\n", 0, match.start()) + 1
        if _DECLARATION_PREFIX.search(body, line_start, match.start()):
            continue

        segments = match.group(1).split(".")
        called_member = segments[-1]
        called_type = ".".join(segments[:-1]) if len(segments) > 1 else caller_type

        sites.append(
            CallSite(
                file_path=file_path,
                caller_type=caller_type,
                caller_member=caller_member,
                called_type=called_type,
                called_member=called_member,
                line=first_line + index.line_of(match.start()) - 1,
            )
        )

    return sites


class CallGraph:
    """Call sites aggregated across analyzed files.

    Files may be analyzed concurrently; each produces its own list of call
    sites and hands it over through ``merge``, which is lock-protected.
    """

    def __init__(self) -> None:
        self._sites: list[CallSite] = []
        self._lock = threading.Lock()

    def merge(self, sites: Iterable[CallSite]) -> None:
        """Append one file's call sites."""
        batch = list(sites)
        with self._lock:
            self._sites.extend(batch)
        logger.debug("Merged %d call sites (total %d)", len(batch), len(self._sites))

    def clear(self) -> None:
        with self._lock:
            self._sites.clear()

    @property
    def sites(self) -> list[CallSite]:
        with self._lock:
            return list(self._sites)

    def callers_of(self, member: str, type_name: str | None = None) -> list[CallSite]:
        """Call sites that invoke ``member`` (optionally only on ``type_name``)."""
        return [
            site
            for site in self.sites
            if site.called_member == member
            and (type_name is None or site.called_type == type_name)
        ]

    def callees_of(self, type_name: str, member: str) -> list[CallSite]:
        """Call sites made from inside ``type_name.member``."""
        return [
            site
            for site in self.sites
            if site.caller_type == type_name and site.caller_member == member
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sites)

    def __iter__(self) -> Iterator[CallSite]:
        return iter(self.sites)
