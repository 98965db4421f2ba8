"""Read-only reporting on the Empty Set Dollar DAO contract."""

from .aggregate import DaoAggregator, accumulate
from .errors import ConfigError, DaoQueryError, DecodeError, GatewayError
from .gateway import DAO_ADDRESS, START_BLOCK, DaoGateway
from .models import EpochSnapshot, GlobalTotals, RunResult, UserSnapshot, UserStatus

__version__ = "0.1.0"
