"""
Async Round Records Client

Reads game rounds from the PostgREST-style endpoint of the round store,
or from a local JSON export. Uses httpx for async HTTP requests.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from gamenight_analytics.config import Settings, get_settings
from gamenight_analytics.models.round import Round

logger = logging.getLogger(__name__)


class RecordsAPIError(Exception):
    """Exception raised for round store errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def parse_rounds(rows: list[dict[str, Any]]) -> list[Round]:
    """
    Validate raw rows into Rounds, skipping rows that cannot be parsed.

    Args:
        rows: Raw records as returned by the store

    Returns:
        List of Round objects
    """
    rounds = []
    for row in rows:
        try:
            rounds.append(Round.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid round %s: %d validation error(s)",
                row.get("id", "<no id>"),
                exc.error_count(),
            )
    return rounds


def load_rounds_file(path: Path | str) -> list[Round]:
    """
    Load rounds from a JSON export.

    Accepts either a list of rows or an object with a "games" list.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("games", [])
    return parse_rounds(data)


class RecordsClient:
    """
    Async client for the round store.

    Usage:
        async with RecordsClient() as client:
            rounds = await client.get_rounds()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "RecordsClient":
        """Create HTTP client on context entry."""
        if not self.settings.records_base_url:
            raise RecordsAPIError("No records_base_url configured")

        headers = {"Accept": "application/json"}
        if self.settings.records_api_key:
            headers["apikey"] = self.settings.records_api_key
            headers["Authorization"] = f"Bearer {self.settings.records_api_key}"

        self._client = httpx.AsyncClient(
            base_url=self.settings.records_base_url,
            timeout=httpx.Timeout(self.settings.records_timeout),
            headers=headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close HTTP client on context exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError(
                "RecordsClient must be used as async context manager: "
                "async with RecordsClient() as client: ..."
            )
        return self._client

    async def _get(self, endpoint: str, params: dict[str, str] | None = None) -> Any:
        """Make a GET request to the round store."""
        try:
            response = await self.client.get(endpoint, params=params)
        except httpx.HTTPError as exc:
            raise RecordsAPIError(f"Request failed: {endpoint} ({exc})") from exc

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            raise RecordsAPIError(
                f"API request failed: {endpoint}",
                status_code=response.status_code,
            )

        return response.json()

    async def get_rounds(self) -> list[Round]:
        """
        Get every recorded round, newest first.

        Returns:
            List of Round objects
        """
        data = await self._get(
            f"/{self.settings.records_table}",
            params={"select": "*", "order": "game_date.desc,created_at.desc"},
        )
        if not data:
            return []
        rounds = parse_rounds(data)
        logger.info("Fetched %d rounds from the round store", len(rounds))
        return rounds
