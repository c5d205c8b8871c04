"""Status vocabulary adapter.

Callers use slightly different words for the same status. Everything is
mapped onto :class:`FindingStatus` here, before scoring sees it.
"""

from __future__ import annotations

from typing import Any

from diag_core.enums import FindingStatus
from diag_core.exceptions import FindingValidationError

STATUS_ALIASES: dict[str, FindingStatus] = {
    "critical": FindingStatus.CRITICAL_GAP,
}


def normalize_status(raw: Any, obligation_id: str | None = None) -> FindingStatus:
    """Map a raw status value onto the canonical enumeration.

    Accepts :class:`FindingStatus` members, canonical strings and the aliases in
    ``STATUS_ALIASES``, ignoring surrounding whitespace and case. Anything else
    raises :class:`FindingValidationError`; unknown values are never coerced.
    """
    if isinstance(raw, FindingStatus):
        return raw
    if not isinstance(raw, str):
        raise FindingValidationError(
            f"Finding for obligation {obligation_id!r} has non-string status {raw!r}",
            obligation_id=obligation_id,
            value=raw,
        )

    key = raw.strip().lower()
    if key in STATUS_ALIASES:
        return STATUS_ALIASES[key]
    try:
        return FindingStatus(key)
    except ValueError:
        raise FindingValidationError(
            f"Finding for obligation {obligation_id!r} has unrecognized status {raw!r}",
            obligation_id=obligation_id,
            value=raw,
        ) from None
