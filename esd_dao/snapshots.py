"""Epoch and user snapshots, each built from a fan-out of contract reads."""

from concurrent.futures import Executor

from .fanout import gather
from .gateway import DaoGateway
from .models import EpochSnapshot, UserSnapshot, UserStatus

EPOCH_READS = ("outstandingCoupons", "couponsExpiration", "expiringCoupons", "totalBondedAt")
USER_READS = ("balanceOfStaged", "balanceOfBonded", "statusOf", "fluidUntil", "lockedUntil")


def _read_all(gateway: DaoGateway, executor: Executor, names, arg):
    return gather(executor, [lambda name=name: gateway.call(name, arg) for name in names])


def get_epoch_data(gateway: DaoGateway, epoch: int, executor: Executor) -> EpochSnapshot:
    """Coupon and bonding figures for `epoch`."""
    outstanding, expiration, expiring, bonded = _read_all(gateway, executor, EPOCH_READS, epoch)
    return EpochSnapshot(
        outstanding_coupons=outstanding,
        coupons_expiration=expiration,
        expiring_coupons=expiring,
        total_bonded=bonded,
    )


def get_user_data(gateway: DaoGateway, user: str, executor: Executor) -> UserSnapshot:
    """Balances, status and lockup epochs of one holder."""
    staged, bonded, status, fluid_until, locked_until = _read_all(gateway, executor, USER_READS, user)
    return UserSnapshot(
        staged=staged,
        bonded=bonded,
        status=UserStatus.from_code(status),
        fluid_until=fluid_until,
        locked_until=locked_until,
    )
