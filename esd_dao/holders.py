"""Discover every account that ever deposited into the DAO."""

from typing import Iterable, List

from web3 import Web3

from .gateway import START_BLOCK, DaoGateway

DEPOSIT_EVENT = "Deposit"


def unique_holders(events: Iterable) -> List[str]:
    """Distinct `account` arguments of the events, in first-occurrence order."""
    accounts = (Web3.to_checksum_address(event["args"]["account"]) for event in events)
    return list(dict.fromkeys(accounts))


def discover_holders(gateway: DaoGateway, from_block: int = START_BLOCK) -> List[str]:
    # A single query over the whole history; providers may reject it as too
    # large unless the gateway is configured with a log chunk size.
    events = gateway.query_events(DEPOSIT_EVENT, from_block)
    return unique_holders(events)
