import argparse
import sys
import logging

from common.logging_setup import setup_logging
from common.settings import load_settings
from ingestion.client import ChainClient
from ingestion.errors import ChainClientError
from ingestion.indexer import AddressIndex

log = logging.getLogger(__name__)


def print_transactions(index: AddressIndex, address: str, out=None):
    out = out or sys.stdout
    txs = index.get_transactions(address)
    print(f"Transactions for address {address}: {len(txs)}", file=out)
    for tx in txs:
        print(f"Hash: {tx.hash}", file=out)
        print(f"From: {tx.sender}", file=out)
        print(f"To: {tx.recipient or ''}", file=out)
        print(f"Value: {tx.value}", file=out)
        print(f"Gas Price: {tx.gas_price}", file=out)
        print(file=out)


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Ingest blocks and list transactions for watched addresses")
    p.add_argument("--address", action="append", required=True,
                   help="Address to watch (repeatable)")
    p.add_argument("--block", type=int, action="append", required=True,
                   help="Block number to ingest (repeatable, ingested in the given order)")
    p.add_argument("--config", default="config.yaml",
                   help="Path to config.yaml")
    args = p.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except RuntimeError as e:
        print(f"ERROR {e}", file=sys.stderr)
        return 2
    setup_logging(settings.logging.level)

    index = AddressIndex(ChainClient.from_settings(settings))
    for addr in args.address:
        index.subscribe(addr)

    failed = 0
    for blk in args.block:
        try:
            index.ingest_block(blk)
        except (ValueError, ChainClientError) as e:
            print(f"ERROR block {blk}: {e}", file=sys.stderr)
            failed += 1

    print(f"Current block {index.get_current_block()}")
    for addr in index.subscriptions():
        print_transactions(index, addr)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
