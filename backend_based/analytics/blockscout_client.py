"""
Blockscout v2 REST client: the classifier's data source.

Read-only GETs against {BLOCKSCOUT_API_URL}/addresses/{address}/... with one
shared httpx.AsyncClient. Every failure (transport error, timeout, non-200,
malformed JSON, unexpected shape) is raised as DataSourceError; callers decide
whether to degrade. No retries. List endpoints follow next_page_params up to
max_pages.
"""

from __future__ import annotations

from typing import Any

import httpx

from backend_based.analytics.models import (
    InternalTransactionRecord,
    TokenTransferRecord,
    WalletActivityRecord,
)
from backend_based.based_logging import get_logger
from backend_based.config import get_settings
from backend_based.core.exceptions import DataSourceError

logger = get_logger(__name__)


def _as_int(raw: Any) -> int:
    if raw is None or raw == "":
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


class BlockscoutClient:
    """
    Async explorer client. Use as `async with BlockscoutClient() as client:`
    or pass an existing httpx.AsyncClient (not closed by this class).
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_pages: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.blockscout_api_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.blockscout_api_key
        self.timeout = timeout if timeout is not None else settings.request_timeout_sec
        self.max_pages = max_pages if max_pages is not None else settings.max_pages
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "BlockscoutClient":
        self._http()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"accept": "application/json"},
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        query = dict(params or {})
        if self.api_key:
            query["apikey"] = self.api_key
        url = f"{self.base_url}{path}"
        try:
            resp = await self._http().get(url, params=query)
        except httpx.HTTPError as e:
            raise DataSourceError(path, f"request failed: {e.__class__.__name__}: {e}") from e
        if resp.status_code != 200:
            raise DataSourceError(path, f"HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise DataSourceError(path, "malformed JSON") from e

    async def _get_object(self, path: str) -> dict[str, Any]:
        data = await self._get_json(path)
        if not isinstance(data, dict):
            raise DataSourceError(path, f"expected object, got {type(data).__name__}")
        return data

    async def _get_items(self, path: str) -> list[dict[str, Any]]:
        """Collect `items` across pages; stop at max_pages or when next_page_params is null."""
        items: list[dict[str, Any]] = []
        params: dict[str, Any] | None = None
        for page in range(max(1, self.max_pages)):
            data = await self._get_json(path, params)
            if not isinstance(data, dict) or not isinstance(data.get("items"), list):
                raise DataSourceError(path, "missing items list")
            items.extend(i for i in data["items"] if isinstance(i, dict))
            next_params = data.get("next_page_params")
            if not isinstance(next_params, dict) or not next_params:
                break
            params = next_params
        logger.debug("blockscout_items_fetched", path=path, count=len(items), pages=page + 1)
        return items

    # -------------------------------------------------------------------------
    # Sub-queries
    # -------------------------------------------------------------------------

    async def get_balance(self, address: str) -> int:
        """Native coin balance in wei."""
        data = await self._get_object(f"/addresses/{address}")
        return _as_int(data.get("coin_balance"))

    async def get_counters(self, address: str) -> dict[str, int]:
        """transactions_count and token_transfers_count for the address."""
        data = await self._get_object(f"/addresses/{address}/counters")
        return {
            "transactions_count": _as_int(data.get("transactions_count")),
            "token_transfers_count": _as_int(data.get("token_transfers_count")),
        }

    async def get_transactions(self, address: str) -> list[WalletActivityRecord]:
        items = await self._get_items(f"/addresses/{address}/transactions")
        return [WalletActivityRecord.from_api_item(i) for i in items]

    async def get_token_transfers(self, address: str) -> list[TokenTransferRecord]:
        items = await self._get_items(f"/addresses/{address}/token-transfers")
        return [TokenTransferRecord.from_api_item(i) for i in items]

    async def get_internal_transactions(self, address: str) -> list[InternalTransactionRecord]:
        items = await self._get_items(f"/addresses/{address}/internal-transactions")
        return [InternalTransactionRecord.from_api_item(i) for i in items]

    def __repr__(self) -> str:
        return f"BlockscoutClient(base_url={self.base_url!r}, max_pages={self.max_pages})"

