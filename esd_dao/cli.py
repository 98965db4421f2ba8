#!/usr/bin/env python3
"""
Report the public state of the Empty Set Dollar DAO contract.
Prints DAO-wide totals, the current epoch and the state of every depositor.
"""

import argparse
import os
import sys
from typing import List, Optional

from .aggregate import DaoAggregator
from .errors import DaoQueryError
from .gateway import DAO_ADDRESS, DEFAULT_RPC_URL, START_BLOCK, DaoGateway, load_abi
from .report import print_report, write_users_to_csv

BLOCK_TAGS = ("latest", "safe", "finalized")


def block_identifier(value: str):
    """argparse type for --block: a block number or a block tag."""
    if value in BLOCK_TAGS:
        return value
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a block number or one of {', '.join(BLOCK_TAGS)}")
    if number < 0:
        raise argparse.ArgumentTypeError("block number must not be negative")
    return number


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query the ESD DAO contract for global, epoch and per-holder state",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report against the default endpoint (or $URL)
  esd-dao-query

  # Pin every read to one block and export holders
  esd-dao-query --block 11500000 --output-csv holders.csv

  # Scan Deposit logs in windows for providers that cap eth_getLogs
  esd-dao-query --rpc-url https://mainnet.infura.io/v3/YOUR_KEY --log-chunk-size 100000

  # Fetch holder state with 8 concurrent workers
  esd-dao-query --workers 8
        """
    )

    # RPC configuration
    parser.add_argument(
        '--rpc-url',
        default=os.environ.get("URL", DEFAULT_RPC_URL),
        help=f'Ethereum RPC endpoint URL (default: $URL or {DEFAULT_RPC_URL})'
    )
    parser.add_argument(
        '--contract-address',
        default=DAO_ADDRESS,
        help=f'DAO contract address (default: {DAO_ADDRESS})'
    )
    parser.add_argument(
        '--abi-file',
        help='JSON ABI to use instead of the built-in DAO ABI'
    )

    # Query configuration
    parser.add_argument(
        '--start-block',
        type=int,
        default=START_BLOCK,
        help=f'First block scanned for Deposit events (default: {START_BLOCK})'
    )
    parser.add_argument(
        '--block',
        type=block_identifier,
        default="latest",
        help='Block number or tag every read is made at (default: latest)'
    )
    parser.add_argument(
        '--log-chunk-size',
        type=positive_int,
        help='Query Deposit events in windows of this many blocks (default: one request)'
    )
    parser.add_argument(
        '--workers',
        type=positive_int,
        default=1,
        help='Holders queried concurrently (default: 1)'
    )

    # Output options
    parser.add_argument(
        '--output-csv',
        help='Also write per-holder results to a CSV file'
    )
    return parser


def print_progress(index: int, total: int, address: str):
    print(f"Querying {index}/{total}: {address}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        abi = load_abi(args.abi_file) if args.abi_file else None

        print(f"Connecting to {args.rpc_url}...")
        gateway = DaoGateway.connect(
            args.rpc_url,
            address=args.contract_address,
            abi=abi,
            block_identifier=args.block,
            log_chunk_size=args.log_chunk_size,
        )

        print("Querying contract...")
        aggregator = DaoAggregator(
            gateway,
            start_block=args.start_block,
            workers=args.workers,
            progress=print_progress,
        )
        result = aggregator.run()

        print()
        print_report(result)

        if args.output_csv:
            write_users_to_csv(result, args.output_csv)
    except (DaoQueryError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
