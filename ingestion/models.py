# ingestion/models.py
"""
ingestion.models
Typed records for eth_getBlockByNumber responses (full transaction form).
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Transaction(BaseModel):
    """A single transaction as reported by the node.

    ``value`` and ``gas_price`` are kept as the node's hex strings.
    ``recipient`` is None for contract creation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    hash: StrictStr
    sender: StrictStr = Field(alias="from")
    recipient: Optional[StrictStr] = Field(default=None, alias="to")
    value: StrictStr
    gas_price: StrictStr = Field(alias="gasPrice")


class Block(BaseModel):
    model_config = ConfigDict(extra="ignore")

    transactions: List[Transaction]


class RpcResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # required, but null when the block is not found or not yet mined
    result: Optional[Block]
