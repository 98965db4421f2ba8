"""Console and CSV output for a RunResult."""

import csv
import sys
from decimal import Decimal

from web3 import Web3

from .models import RunResult


def format_amount(amount: int) -> str:
    """Render an 18-decimal token amount, e.g. 1500000000000000000 -> '1.5'."""
    text = f"{Decimal(Web3.from_wei(amount, 'ether')):f}"
    if "." not in text:
        text += ".0"
    return text


def print_report(result: RunResult, out=None):
    """Print DAO-wide figures, the epoch snapshot and every holder."""
    if out is None:
        out = sys.stdout
    totals = result.totals
    epoch_data = result.epoch_data

    def emit(line=""):
        print(line, file=out)

    emit(f"Supply {format_amount(totals.supply)}")
    emit(f"Total bonded {format_amount(totals.total_bonded)}")
    emit(f"Total staged {format_amount(totals.total_staged)}")
    emit(f"Total debt {format_amount(totals.total_debt)}")
    emit(f"Total redeemable {format_amount(totals.total_redeemable)}")

    emit(f"Current epoch: {result.epoch}")
    emit(f"Epoch Time: {result.epoch_time}")

    emit("Epoch data:")
    emit(f"  Outstanding coupons: {format_amount(epoch_data.outstanding_coupons)}")
    emit(f"  Coupons expiration: {epoch_data.coupons_expiration}")
    emit(f"  Expiring coupons: {format_amount(epoch_data.expiring_coupons)}")
    emit(f"  Total bonded at epoch: {format_amount(epoch_data.total_bonded)}")

    emit("\n" + "=" * 120)
    emit("USER DATA:")
    emit("=" * 120)
    emit(f"{'Address':<45} {'Staged':<25} {'Bonded':<25} {'Status':<8} {'Fluid until':<12} {'Locked until'}")
    emit("-" * 120)
    for address, user in result.users.items():
        emit(f"{address:<45} {format_amount(user.staged):<25} {format_amount(user.bonded):<25} "
             f"{user.status.name:<8} {user.fluid_until:<12} {user.locked_until}")

    emit(f"\nHolders: {len(result.users)}")
    emit(f"Total Frozen: {format_amount(result.total_frozen)}")
    emit(f"Total Fluid: {format_amount(result.total_fluid)}")


def write_users_to_csv(result: RunResult, output_path: str):
    """Write one row per holder with raw (unscaled) amounts."""
    with open(output_path, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(['address', 'staged', 'bonded', 'status', 'fluid_until', 'locked_until'])
        for address, user in result.users.items():
            writer.writerow([address, user.staged, user.bonded, user.status.name,
                             user.fluid_until, user.locked_until])
    print(f"Results written to {output_path}")
