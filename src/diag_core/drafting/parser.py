"""Parse the drafter's structured JSON output into draft findings."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from diag_core.exceptions import DraftParseError, FindingValidationError
from diag_core.grading.status import normalize_status
from diag_core.models import DraftFinding

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)

_KNOWN_KEYS = frozenset({"obligation_id", "score", "status", "finding_text", "citation", "remediation"})

_EXCERPT_LEN = 500


def _strip_fence(raw_text: str) -> str:
    match = _FENCE_RE.match(raw_text)
    return match.group(1) if match else raw_text.strip()


def _text_field(item: dict[str, Any], key: str) -> str:
    value = item.get(key) or ""
    return value if isinstance(value, str) else str(value)


def parse_draft_response(raw_text: str, *, known_obligations: Iterable[str] | None = None) -> list[DraftFinding]:
    """Turn the drafter's reply into validated draft findings.

    The reply must be a JSON array of objects carrying ``obligation_id`` and
    ``score`` (``status`` is accepted too). A single markdown code fence around
    the array is tolerated.

    Args:
        raw_text: Text returned by the drafter.
        known_obligations: When given, obligation ids outside this set are rejected.

    Raises:
        DraftParseError: If the reply is not a JSON array of well-formed findings,
            names an unknown obligation, repeats an obligation or carries an
            unrecognized status.
    """
    excerpt = raw_text[:_EXCERPT_LEN]
    try:
        payload = json.loads(_strip_fence(raw_text))
    except json.JSONDecodeError as e:
        raise DraftParseError(f"Drafter returned unparseable JSON: {e}", raw_excerpt=excerpt) from e

    if not isinstance(payload, list):
        raise DraftParseError(f"Drafter returned {type(payload).__name__}, expected a list", raw_excerpt=excerpt)

    known = set(known_obligations) if known_obligations is not None else None
    drafts: list[DraftFinding] = []
    seen: set[str] = set()

    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise DraftParseError(f"Draft item {index} is not an object", raw_excerpt=excerpt)

        obligation_id = item.get("obligation_id")
        if not isinstance(obligation_id, str) or not obligation_id:
            raise DraftParseError(f"Draft item {index} has no obligation_id", raw_excerpt=excerpt)
        if known is not None and obligation_id not in known:
            raise DraftParseError(f"Draft item {index} names unknown obligation {obligation_id!r}", raw_excerpt=excerpt)
        if obligation_id in seen:
            raise DraftParseError(f"Draft repeats obligation {obligation_id!r}", raw_excerpt=excerpt)
        seen.add(obligation_id)

        raw_status = item["score"] if "score" in item else item.get("status")
        try:
            status = normalize_status(raw_status, obligation_id)
        except FindingValidationError as e:
            raise DraftParseError(str(e), raw_excerpt=excerpt) from e

        extra = set(item) - _KNOWN_KEYS
        if extra:
            logger.warning("Dropping unexpected draft fields for %s: %s", obligation_id, sorted(extra))

        drafts.append(
            DraftFinding(
                obligation_id=obligation_id,
                status=status,
                finding_text=_text_field(item, "finding_text"),
                citation=_text_field(item, "citation"),
                remediation=_text_field(item, "remediation"),
            )
        )

    return drafts
