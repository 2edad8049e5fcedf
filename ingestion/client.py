# ingestion/client.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from common.settings import DEFAULT_RPC_URL, Settings
from ingestion.errors import DecodeFailure, TransportFailure
from ingestion.models import RpcResponse, Transaction

log = logging.getLogger(__name__)

GET_BLOCK_METHOD = "eth_getBlockByNumber"
REQUEST_ID = 1


def build_request(block_number: int) -> dict:
    if isinstance(block_number, bool) or not isinstance(block_number, int) or block_number < 0:
        raise ValueError("block_number must be a non negative integer")
    return {
        "jsonrpc": "2.0",
        "method": GET_BLOCK_METHOD,
        "params": [hex(block_number), True],
        "id": REQUEST_ID,
    }


def decode_block_transactions(data: Any, block_number: Optional[int] = None) -> List[Transaction]:
    """
    Validate a decoded JSON-RPC response and return its transactions.
    A null result is an empty block; anything malformed fails the whole block.
    """
    if isinstance(data, dict) and data.get("error") is not None:
        raise DecodeFailure(f"RPC error for block {block_number}: {data['error']}", block_number)
    try:
        resp = RpcResponse.model_validate(data)
    except ValidationError as e:
        raise DecodeFailure(f"Malformed block payload for block {block_number}: {e}", block_number) from e
    if resp.result is None:
        return []
    return list(resp.result.transactions)


class ChainClient:
    """Fetches one block's transactions from a JSON-RPC endpoint."""

    def __init__(self, url: str = DEFAULT_RPC_URL, timeout: float = 30.0):
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainClient":
        return cls(url=settings.rpc.url, timeout=settings.rpc.timeout)

    def fetch_block_transactions(self, block_number: int) -> List[Transaction]:
        payload = build_request(block_number)
        log.debug("POST %s %s params=%s", self.url, GET_BLOCK_METHOD, payload["params"])
        try:
            resp = requests.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            # 1xx and unfollowed 3xx slip past raise_for_status
            if not 200 <= resp.status_code < 300:
                raise requests.HTTPError(f"{resp.status_code} non-success status", response=resp)
        except requests.RequestException as e:
            log.warning("transport failure for block %d url=%s: %s", block_number, self.url, e)
            raise TransportFailure(
                f"RPC transport failed for block {block_number} url={self.url}", block_number
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            log.warning("response for block %d is not JSON", block_number)
            raise DecodeFailure(f"Response for block {block_number} is not valid JSON", block_number) from e

        try:
            txs = decode_block_transactions(data, block_number)
        except DecodeFailure as e:
            log.warning("decode failure for block %d: %s", block_number, e)
            raise
        log.debug("block %d: %d transactions", block_number, len(txs))
        return txs


__all__ = [
    "ChainClient",
    "build_request",
    "decode_block_transactions",
]
