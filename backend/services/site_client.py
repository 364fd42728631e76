"""
MedDent API - HTTP client for the public site endpoints

Used by the visitor-side attribution flow. Every transport or HTTP error
surfaces as SiteApiError; "not found" answers are returned as None/False.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger("site_client")


class SiteApiError(Exception):
    """Request to the MedDent API failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SiteApiClient:
    """
    Thin wrapper around httpx.AsyncClient.

    Pass either base_url (a client is created and owned) or an existing
    httpx.AsyncClient (e.g. one built on httpx.ASGITransport).
    """

    def __init__(self, base_url: str = "", http_client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def close(self):
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise SiteApiError(f"{method} {path} failed: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        if response.status_code >= 400:
            raise SiteApiError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise SiteApiError("Invalid JSON response", status_code=response.status_code) from e

    # ==================== CAMPAIGNS ====================

    async def get_campaign(self, code: str) -> Optional[Dict[str, Any]]:
        """Campaign by unique_code, None if unknown"""
        response = await self._request("GET", f"/api/campaigns/{quote(code, safe='')}")
        if response.status_code == 404:
            return None
        body = self._json(response)
        data = body.get("data") if isinstance(body, dict) else body
        if data is not None and not isinstance(data, dict):
            raise SiteApiError("Unexpected campaign payload", status_code=response.status_code)
        return data

    async def increment_campaign_click(self, code: str) -> bool:
        """True if a click was counted, False if the campaign is not eligible"""
        response = await self._request("POST", "/api/campaigns/increment-click", json={"code": code})
        if response.status_code == 404:
            return False
        self._json(response)
        return True

    # ==================== LEADS ====================

    async def submit_consultation_form(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._request("POST", "/api/consultation-forms", json=payload)
        return self._json(response)
