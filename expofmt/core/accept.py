"""Accept header parsing.

``parse_accept`` turns a raw ``Accept`` header into media-range preferences
ranked by a three-rule comparator: quality, then concrete-over-wildcard
type, then concrete-over-wildcard subtype. The rules are checked one after
another and the first that holds wins, so the ordering is a comparator and
not a sort key. It is not transitive for mixed quality/wildcard inputs: a
higher-quality wildcard can end up behind a lower-quality concrete range.

Malformed clauses and parameters are dropped silently and an unparseable
quality becomes ``0.0``. Nothing in here raises.
"""

import re
from dataclasses import dataclass, field

WILDCARD = "*"

# ASCII-only float grammar: decimal, hex with a binary exponent, inf/infinity/nan.
_QUALITY_RE = re.compile(
    r"[+-]?(?:"
    r"(?P<dec>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
    r"|(?P<hex>0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+)"
    r"|(?P<special>(?i:inf|infinity|nan))"
    r")"
)


@dataclass
class MediaRangePreference:
    """One clause of an Accept header."""

    type: str
    subtype: str
    quality: float = 1.0
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def media_type(self) -> str:
        return f"{self.type}/{self.subtype}"


def _ranks_before(a: MediaRangePreference, b: MediaRangePreference) -> bool:
    if a.quality > b.quality:
        return True
    if a.type != WILDCARD and b.type == WILDCARD:
        return True
    if a.subtype != WILDCARD and b.subtype == WILDCARD:
        return True
    return False


def _rank(prefs: list[MediaRangePreference]) -> None:
    """Insertion sort in place: swap neighbours while the later one ranks first.

    With a non-transitive comparator the outcome depends on which pairs get
    compared, so the comparison sequence is fixed here rather than left to
    ``sorted``.
    """
    for i in range(1, len(prefs)):
        j = i
        while j > 0 and _ranks_before(prefs[j], prefs[j - 1]):
            prefs[j], prefs[j - 1] = prefs[j - 1], prefs[j]
            j -= 1


def _parse_quality(raw: str) -> float:
    # No padding, digit separators or non-ASCII digits, all of which float() takes.
    match = _QUALITY_RE.fullmatch(raw)
    if match is None:
        return 0.0
    if match.group("hex"):
        return float.fromhex(raw)
    return float(raw)


def _parse_clause(clause: str) -> MediaRangePreference | None:
    media_range, *params = clause.split(";")

    parts = media_range.split("/")
    type_ = parts[0].strip(" ")
    if len(parts) == 1 and type_ == WILDCARD:
        subtype = WILDCARD
    elif len(parts) == 2:
        subtype = parts[1].strip(" ")
    else:
        return None

    pref = MediaRangePreference(type=type_, subtype=subtype)
    for param in params:
        name, sep, value = param.partition("=")
        if not sep:
            continue
        name = name.strip(" ")
        if name == "q":
            pref.quality = _parse_quality(value)
        else:
            pref.parameters[name] = value.strip(" ")
    return pref


def parse_accept(header: str | None) -> list[MediaRangePreference]:
    """Parse an Accept header into a ranked list of preferences.

    Args:
        header: Raw header value. ``None`` is treated as an empty header.

    Returns:
        New list of preferences, best first. Clauses that are not ``*`` or
        ``type/subtype`` are left out, so an empty header yields ``[]``.
    """
    prefs = []
    for clause in (header or "").split(","):
        pref = _parse_clause(clause.strip(" "))
        if pref is not None:
            prefs.append(pref)
    _rank(prefs)
    return prefs
