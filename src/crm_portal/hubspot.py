from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from crm_portal.config import DEFAULT_BASE_URL, HubSpotConfig
from crm_portal.records import PAGE_SIZE, CrmRecord

logger = logging.getLogger(__name__)


class HubSpotError(Exception):
    """An upstream call failed (transport error, non-2xx status or bad payload)."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class HubSpotClient:
    """Thin async wrapper over the CRM v3 objects endpoints for one object type."""

    def __init__(
        self,
        *,
        token: str,
        object_type: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.object_type = object_type
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: HubSpotConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> HubSpotClient:
        return cls(
            token=config.token,
            object_type=config.object_type,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    @property
    def objects_path(self) -> str:
        return f"/crm/v3/objects/{quote(self.object_type, safe='')}"

    async def list_objects(
        self, properties: Iterable[str], *, limit: int = PAGE_SIZE
    ) -> list[CrmRecord]:
        response = await self._request(
            "GET",
            self.objects_path,
            params={"properties": ",".join(properties), "limit": limit},
        )
        data = self._json_object(response)
        results = data.get("results") or []
        if not isinstance(results, list):
            raise HubSpotError("HubSpot 'results' is not a list", body=str(results))

        records: list[CrmRecord] = []
        for item in results:
            try:
                records.append(CrmRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping malformed record from HubSpot: %s (%s)", item, exc)
        return records

    async def create_object(self, properties: Mapping[str, str]) -> CrmRecord | None:
        """Create one record; any 2xx counts as created.

        Returns the parsed record when the response carries one, else None.
        """

        response = await self._request(
            "POST", self.objects_path, json={"properties": dict(properties)}
        )
        if not response.content:
            return None
        try:
            return CrmRecord.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "HubSpot accepted the record (%s) but the response is unreadable: %s",
                response.status_code,
                exc,
            )
            return None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise HubSpotError(f"HubSpot request failed: {exc}") from exc

        if response.status_code >= 400:
            raise HubSpotError(
                f"HubSpot returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    @staticmethod
    def _json_object(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise HubSpotError(
                f"Invalid JSON from HubSpot: {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        if not isinstance(data, dict):
            raise HubSpotError(
                "HubSpot payload is not an object",
                status_code=response.status_code,
                body=response.text,
            )
        return data

    async def aclose(self) -> None:
        await self._http.aclose()


__all__ = ["HubSpotClient", "HubSpotError"]
