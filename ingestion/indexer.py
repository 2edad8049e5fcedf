# ingestion/indexer.py
"""
ingestion.indexer
Per-address transaction history for a set of watched addresses.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, List, Protocol

from ingestion.errors import ChainClientError
from ingestion.models import Transaction

log = logging.getLogger(__name__)


class BlockSource(Protocol):
    def fetch_block_transactions(self, block_number: int) -> List[Transaction]:
        ...


class AddressIndex:
    """
    Owns the subscription set, the history index and the last ingested block.
    Addresses are matched exactly as given, no case folding.
    """

    def __init__(self, client: BlockSource):
        self.client = client
        self._current_block = 0
        # dict keys double as an insertion-ordered set
        self._addresses: Dict[str, None] = {}
        self._transactions: Dict[str, List[Transaction]] = {}
        self._lock = threading.Lock()

    def subscribe(self, address: str) -> bool:
        """Watch address. Returns False if it was already watched."""
        with self._lock:
            if address in self._addresses:
                return False
            self._addresses[address] = None
            log.info("subscribed %s", address)
            return True

    def subscriptions(self) -> List[str]:
        with self._lock:
            return list(self._addresses)

    def get_current_block(self) -> int:
        with self._lock:
            return self._current_block

    def get_transactions(self, address: str) -> List[Transaction]:
        with self._lock:
            return list(self._transactions.get(address, ()))

    def ingest_block(self, block_number: int) -> None:
        """
        Fetch block_number and record transactions touching watched addresses.
        Raises TransportFailure or DecodeFailure with the index left untouched.
        """
        try:
            txs = self.client.fetch_block_transactions(block_number)
        except ChainClientError as e:
            log.error("failed to ingest block %d: %s", block_number, e)
            raise

        matched = 0
        with self._lock:
            for tx in txs:
                # sender and recipient are checked independently, so a
                # self transfer lands in the same bucket twice
                if tx.sender in self._addresses:
                    self._transactions.setdefault(tx.sender, []).append(tx)
                    matched += 1
                if tx.recipient is not None and tx.recipient in self._addresses:
                    self._transactions.setdefault(tx.recipient, []).append(tx)
                    matched += 1
            self._current_block = block_number
        log.info("ingested block %d: %d transactions, %d matches", block_number, len(txs), matched)

    def ingest_range(self, start_block: int, end_block: int) -> int:
        """Ingest start_block..end_block inclusive, stopping at the first failure."""
        if end_block < start_block:
            raise ValueError("end_block must be greater than or equal to start_block")
        count = 0
        for blk_num in range(start_block, end_block + 1):
            self.ingest_block(blk_num)
            count += 1
        return count


__all__ = ["AddressIndex", "BlockSource"]
