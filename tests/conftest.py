"""Shared fixtures: an in-memory stand-in for DaoGateway."""

import threading

import pytest
from web3 import Web3

from esd_dao.errors import GatewayError

CURRENT_EPOCH = 120

ADDR_A = Web3.to_checksum_address("0x" + "a1" * 20)
ADDR_B = Web3.to_checksum_address("0x" + "b2" * 20)
ADDR_C = Web3.to_checksum_address("0x" + "c3" * 20)
ADDR_D = Web3.to_checksum_address("0x" + "d4" * 20)

ONE = 10 ** 18


class FakeGateway:
    """Serves canned contract values; any name in `failing` raises GatewayError."""

    def __init__(self, deposits=(), failing=()):
        self.values = {
            ("totalSupply",): 1000 * ONE,
            ("totalBonded",): 400 * ONE,
            ("totalStaged",): 50 * ONE,
            ("totalDebt",): 300 * ONE,
            ("totalRedeemable",): 20 * ONE,
            ("epoch",): CURRENT_EPOCH,
            ("epochTime",): CURRENT_EPOCH + 3,
            ("outstandingCoupons", CURRENT_EPOCH): 70 * ONE,
            ("couponsExpiration", CURRENT_EPOCH): CURRENT_EPOCH + 90,
            ("expiringCoupons", CURRENT_EPOCH): 5 * ONE,
            ("totalBondedAt", CURRENT_EPOCH): 400 * ONE,
        }
        self.deposits = list(deposits)
        self.failing = set(failing)
        self.calls = []
        self.event_queries = []
        self._lock = threading.Lock()

    def set_user(self, address, bonded, status, staged=0, fluid_until=0, locked_until=0):
        self.values[("balanceOfStaged", address)] = staged
        self.values[("balanceOfBonded", address)] = bonded
        self.values[("statusOf", address)] = status
        self.values[("fluidUntil", address)] = fluid_until
        self.values[("lockedUntil", address)] = locked_until

    def call(self, name, *args):
        with self._lock:
            self.calls.append((name,) + args)
        if name in self.failing:
            raise GatewayError(f"{name} rejected", method=name)
        return self.values[(name,) + args]

    def query_events(self, event_name, from_block):
        self.event_queries.append((event_name, from_block))
        if event_name in self.failing:
            raise GatewayError("query returned more than 10000 results", method=event_name)
        return [{"args": {"account": account}} for account in self.deposits]


@pytest.fixture
def gateway() -> FakeGateway:
    """Deposits [A, B, A]: A FROZEN with 100 bonded, B FLUID with 50 bonded."""
    gw = FakeGateway(deposits=[ADDR_A, ADDR_B, ADDR_A])
    gw.set_user(ADDR_A, bonded=100, status=0, staged=7)
    gw.set_user(ADDR_B, bonded=50, status=1, fluid_until=CURRENT_EPOCH + 2)
    return gw


@pytest.fixture
def make_gateway():
    return FakeGateway
