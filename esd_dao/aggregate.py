"""
Collect the DAO's global figures and the state of every depositor.

Frozen and fluid totals are summed per holder because status is an
account-level property; LOCKED holders count towards neither total.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, Optional, Tuple

from .errors import ConfigError
from .fanout import gather
from .gateway import START_BLOCK, DaoGateway
from .holders import discover_holders
from .models import GlobalTotals, RunResult, UserSnapshot, UserStatus
from .snapshots import USER_READS, get_epoch_data, get_user_data

GLOBAL_READS = ("totalSupply", "totalBonded", "totalStaged", "totalDebt", "totalRedeemable",
                "epoch", "epochTime")

ProgressCallback = Callable[[int, int, str], None]


def accumulate(snapshots: Iterable[Tuple[str, UserSnapshot]]) -> Tuple[Dict[str, UserSnapshot], int, int]:
    """Key snapshots by address and sum bonded balances of FROZEN and FLUID holders."""
    users = {}
    total_frozen = 0
    total_fluid = 0
    for address, snapshot in snapshots:
        if snapshot.status is UserStatus.FROZEN:
            total_frozen += snapshot.bonded
        elif snapshot.status is UserStatus.FLUID:
            total_fluid += snapshot.bonded
        users[address] = snapshot
    return users, total_frozen, total_fluid


class DaoAggregator:
    """
    Builds a RunResult from a gateway.

    With `workers` above one, user snapshots are fetched by a bounded thread
    pool but still accumulated one at a time in holder discovery order, so the
    result is the same as a sequential run.
    """

    def __init__(self, gateway: DaoGateway, start_block: int = START_BLOCK, workers: int = 1,
                 progress: Optional[ProgressCallback] = None):
        if workers < 1:
            raise ConfigError(f"workers must be at least 1, got {workers}")
        self.gateway = gateway
        self.start_block = start_block
        self.workers = workers
        self.progress = progress

    def run(self) -> RunResult:
        with ThreadPoolExecutor(max_workers=len(USER_READS) * self.workers) as reads:
            supply, bonded, staged, debt, redeemable, epoch, epoch_time = gather(
                reads, [lambda name=name: self.gateway.call(name) for name in GLOBAL_READS])
            totals = GlobalTotals(
                supply=supply,
                total_bonded=bonded,
                total_staged=staged,
                total_debt=debt,
                total_redeemable=redeemable,
            )
            epoch_data = get_epoch_data(self.gateway, epoch, reads)

            holders = discover_holders(self.gateway, self.start_block)
            users, total_frozen, total_fluid = accumulate(self._user_snapshots(holders, reads))

        return RunResult(
            totals=totals,
            epoch=epoch,
            epoch_time=epoch_time,
            epoch_data=epoch_data,
            users=users,
            total_frozen=total_frozen,
            total_fluid=total_fluid,
        )

    def _user_snapshots(self, holders, reads):
        def fetch(user):
            return get_user_data(self.gateway, user, reads)

        if self.workers == 1:
            snapshots = map(fetch, holders)
            yield from self._report(holders, snapshots)
            return

        # Executor.map yields in submission order and cancels the remaining
        # work when a result raises.
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            yield from self._report(holders, pool.map(fetch, holders))

    def _report(self, holders, snapshots):
        for i, (user, snapshot) in enumerate(zip(holders, snapshots), 1):
            if self.progress is not None:
                self.progress(i, len(holders), user)
            yield user, snapshot
