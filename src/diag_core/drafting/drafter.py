"""LLM drafting collaborators.

The drafter proposes findings; a human reviewer edits and approves them
before anything is delivered.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from diag_core.drafting.context import DraftRequest, build_drafting_context
from diag_core.drafting.parser import parse_draft_response
from diag_core.exceptions import DrafterAPIError, DrafterConnectionError, DrafterError
from diag_core.models import DraftFinding
from diag_core.obligations import obligation_ids
from diag_core.settings import DrafterSettings

logger = logging.getLogger(__name__)

OUTPUT_CONTRACT = """Assess each EU AI Act obligation area independently from the client's responses.
Assign a score of "compliant", "partial", "critical" or "not_started".
Output ONLY a JSON array, one object per obligation:
[{"obligation_id": "<id>", "score": "<score>", "finding_text": "...", "citation": "...", "remediation": "..."}]"""


class FindingsDrafter(ABC):
    """Abstract base class for anything that proposes draft findings."""

    @abstractmethod
    async def draft(self, request: DraftRequest) -> list[DraftFinding]:
        """Propose one draft finding per obligation."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the drafter is configured and ready."""
        ...


class MessagesAPIDrafter(FindingsDrafter):
    """Drafter backed by a Messages-style LLM HTTP endpoint.

    Example:
        >>> async with MessagesAPIDrafter() as drafter:
        ...     drafts = await drafter.draft(DraftRequest(diagnostic_id="d-1"))

    Args:
        settings: Endpoint settings (defaults to ``DRAFTER_*`` environment variables)
        system_prompt: Instructions sent as the system message
    """

    def __init__(self, settings: DrafterSettings | None = None, *, system_prompt: str = OUTPUT_CONTRACT):
        self.settings = settings or DrafterSettings()
        self.system_prompt = system_prompt

        headers = {
            "anthropic-version": self.settings.api_version,
            "content-type": "application/json",
        }
        if self.settings.api_key:
            headers["x-api-key"] = self.settings.api_key
        else:
            logger.warning("Drafter API key not configured")

        self._client = httpx.AsyncClient(
            base_url=self.settings.api_url.rstrip("/"),
            headers=headers,
            timeout=self.settings.timeout,
        )

    async def __aenter__(self) -> MessagesAPIDrafter:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def health_check(self) -> bool:
        return bool(self.settings.api_key)

    async def draft(self, request: DraftRequest) -> list[DraftFinding]:
        """Send the diagnostic context to the endpoint and parse the reply.

        Raises:
            DrafterError: If no API key is configured
            DrafterAPIError: If the endpoint answers with an error status
            DrafterConnectionError: If the endpoint cannot be reached
            DraftParseError: If the reply is not valid draft JSON
        """
        if not self.settings.api_key:
            raise DrafterError("Drafter API key not configured")

        body = {
            "model": self.settings.model,
            "max_tokens": self.settings.max_tokens,
            "system": self.system_prompt,
            "messages": [{"role": "user", "content": build_drafting_context(request)}],
        }

        try:
            response = await self._client.post("/v1/messages", json=body)
        except httpx.HTTPError as e:
            raise DrafterConnectionError(f"Failed to reach drafting endpoint: {e}") from e

        if response.status_code >= 400:
            try:
                data = response.json()
            except ValueError:
                data = {"detail": response.text}
            raise DrafterAPIError(
                f"Drafting endpoint returned {response.status_code}",
                status_code=response.status_code,
                response_data=data,
            )

        payload = response.json()
        text = "".join(block.get("text", "") for block in payload.get("content", []) if block.get("type") == "text")
        drafts = parse_draft_response(text, known_obligations=obligation_ids())

        logger.info(
            "Drafted %d findings for diagnostic %s with %s",
            len(drafts),
            request.diagnostic_id,
            self.settings.model,
        )
        return drafts
