"""
HTTP Key-Value Adapter

Architectural Intent:
- Infrastructure adapter implementing KeyValueServicePort over a small JSON API
- GET <info_path> is the readiness probe, POST <item_path> stores one record
- Uses httpx; every call is best-effort and never raises
"""

import logging
from typing import Optional
import httpx
from hostsync.domain.ports.key_value_port import KeyValueServicePort
from hostsync.domain.value_objects.key_value_record import KeyValueRecord

logger = logging.getLogger(__name__)


class HttpKeyValueService(KeyValueServicePort):
    def __init__(
        self,
        base_url: str,
        info_path: str = "/info",
        item_path: str = "/item",
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.info_path = info_path
        self.item_path = item_path
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self._transport,
        )

    async def is_ready(self) -> bool:
        try:
            async with self._client() as client:
                resp = await client.get(self.info_path)
        except httpx.HTTPError as e:
            logger.debug("Readiness probe failed: %s", e)
            return False
        return resp.status_code == httpx.codes.OK

    async def put_item(self, record: KeyValueRecord) -> bool:
        try:
            async with self._client() as client:
                resp = await client.post(self.item_path, json=record.to_dict())
                resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(
                "Storing %s/%s failed: %s", record.namespace, record.key, e
            )
            return False
        logger.info("Stored %s/%s", record.namespace, record.key)
        return True
