from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class TelegramError(Exception):
    """Transport, HTTP status or payload failure talking to the Bot API."""


class TelegramClient:
    """Thin async wrapper over the two Bot API calls used for avatars."""

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        api_base = api_base.rstrip("/")
        self._api_url = f"{api_base}/bot{token}"
        self._file_url = f"{api_base}/file/bot{token}"
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ---------------------------
    # Helpers
    # ---------------------------

    async def _call(self, method: str, params: Dict[str, Any]) -> Any:
        try:
            resp = await self._http.get(f"{self._api_url}/{method}", params=params)
        except httpx.HTTPError as e:
            raise TelegramError(f"{method} request failed: {e!r}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise TelegramError(f"{method} returned non-JSON response: HTTP {resp.status_code}") from e

        if resp.status_code >= 400 or not isinstance(data, dict) or not data.get("ok"):
            description = data.get("description") if isinstance(data, dict) else None
            raise TelegramError(f"{method} failed: HTTP {resp.status_code} {description or ''}".rstrip())

        return data.get("result")

    # ---------------------------
    # Bot API
    # ---------------------------

    async def get_latest_photo_file_id(self, user_id: str) -> Optional[str]:
        """file_id of the largest size of the user's newest profile photo.

        None means the user has no profile photo.
        """
        result = await self._call("getUserProfilePhotos", {"user_id": user_id, "limit": 1})

        photos = result.get("photos") if isinstance(result, dict) else None
        if not photos:
            return None

        # each photo is a list of sizes, smallest first
        sizes = photos[0]
        if not sizes:
            return None

        try:
            return sizes[-1]["file_id"]
        except (KeyError, TypeError) as e:
            raise TelegramError("getUserProfilePhotos returned a malformed photo") from e

    async def get_file_path(self, file_id: str) -> Optional[str]:
        result = await self._call("getFile", {"file_id": file_id})
        if not isinstance(result, dict):
            return None
        return result.get("file_path") or None

    def file_url(self, file_path: str) -> str:
        return f"{self._file_url}/{file_path.lstrip('/')}"
