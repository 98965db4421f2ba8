"""Records assembled from contract reads."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .errors import DecodeError


class UserStatus(Enum):
    FROZEN = 0
    FLUID = 1
    LOCKED = 2

    @classmethod
    def from_code(cls, code) -> "UserStatus":
        """Map the numeric `statusOf` result to a status, rejecting unknown codes."""
        # bool is an int subclass; the contract never returns one
        if isinstance(code, bool) or not isinstance(code, int):
            raise DecodeError(code)
        try:
            return cls(code)
        except ValueError as e:
            raise DecodeError(code) from e


@dataclass(frozen=True)
class EpochSnapshot:
    outstanding_coupons: int
    coupons_expiration: int
    expiring_coupons: int
    total_bonded: int


@dataclass(frozen=True)
class UserSnapshot:
    staged: int
    bonded: int
    status: UserStatus
    fluid_until: int
    locked_until: int


@dataclass(frozen=True)
class GlobalTotals:
    supply: int
    total_bonded: int
    total_staged: int
    total_debt: int
    total_redeemable: int


@dataclass(frozen=True)
class RunResult:
    totals: GlobalTotals
    epoch: int
    epoch_time: int
    epoch_data: EpochSnapshot
    users: Dict[str, UserSnapshot]
    total_frozen: int
    total_fluid: int
