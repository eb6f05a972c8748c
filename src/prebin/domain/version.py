"""Version and version-requirement handling.

Requirements use Cargo syntax: a bare version such as ``1.2`` means
``^1.2``, clauses are joined with commas, ``*`` matches anything.
They are translated to semantic_version.SimpleSpec, which implements the
same caret/tilde semantics.
"""

from __future__ import annotations

import semantic_version

from prebin.domain.exceptions import ConflictingVersionSpecifiers, VersionParseError

STAR = "*"


def select_version_req(embedded: str | None, explicit: str | None) -> str:
    """Pick the version requirement for a resolution.

    Args:
        embedded: Requirement from the package reference (``name@req``).
        explicit: Requirement given as a separate option.

    Returns:
        The single requirement to use; ``*`` when neither is given.

    Raises:
        ConflictingVersionSpecifiers: If both are given.
    """
    if embedded is not None and explicit is not None:
        raise ConflictingVersionSpecifiers()
    if embedded is not None:
        return embedded
    if explicit is not None:
        return explicit
    return STAR


def parse_version_req(text: str) -> semantic_version.SimpleSpec:
    """Parse a Cargo-style version requirement.

    Raises:
        VersionParseError: If the requirement is malformed.
    """
    clauses = [_normalize_clause(c) for c in text.split(",")]
    try:
        return semantic_version.SimpleSpec(",".join(clauses))
    except ValueError as e:
        raise VersionParseError(text, str(e)) from e


def parse_version(text: str) -> semantic_version.Version:
    """Parse a full semantic version.

    Raises:
        VersionParseError: Carrying the offending string and parser diagnostic.
    """
    try:
        return semantic_version.Version(text.strip())
    except ValueError as e:
        raise VersionParseError(text, str(e)) from e


def _normalize_clause(clause: str) -> str:
    clause = "".join(clause.split())
    if not clause or clause == STAR:
        return STAR
    if "*" in clause and clause[0].isdigit():
        return f"=={clause}"
    if clause[0].isdigit():
        return f"^{clause}"
    if clause.startswith("=") and not clause.startswith("=="):
        return f"={clause}"
    return clause
