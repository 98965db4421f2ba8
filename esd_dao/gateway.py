"""
Read-only access to the ESD DAO contract over JSON-RPC.

Every contract read and event query goes through DaoGateway so that web3 and
transport failures surface as GatewayError.
"""

import json
from typing import Any, List, Optional, Union

from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import Web3Exception

from .errors import ConfigError, GatewayError

# Contract details
DAO_ADDRESS = "0x443D2f2755DB5942601fa062Cc248aAA153313D3"
START_BLOCK = 10722554  # DAO deployment block
DEFAULT_RPC_URL = "https://ethereum-rpc.publicnode.com"


def _view(name: str, inputs: List[dict], output_type: str = "uint256") -> dict:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": [{"internalType": output_type, "name": "", "type": output_type}],
        "stateMutability": "view",
        "type": "function"
    }


_EPOCH = [{"internalType": "uint256", "name": "epoch", "type": "uint256"}]
_ACCOUNT = [{"internalType": "address", "name": "account", "type": "address"}]

# Contract ABI (only the parts we need)
DAO_ABI = [
    _view("totalSupply", []),
    _view("totalBonded", []),
    _view("totalStaged", []),
    _view("totalDebt", []),
    _view("totalRedeemable", []),
    _view("epoch", []),
    _view("epochTime", []),
    _view("outstandingCoupons", _EPOCH),
    _view("couponsExpiration", _EPOCH),
    _view("expiringCoupons", _EPOCH),
    _view("totalBondedAt", _EPOCH),
    _view("balanceOfStaged", _ACCOUNT),
    _view("balanceOfBonded", _ACCOUNT),
    _view("statusOf", _ACCOUNT, output_type="uint8"),
    _view("fluidUntil", _ACCOUNT),
    _view("lockedUntil", _ACCOUNT),
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "account", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "value", "type": "uint256"}
        ],
        "name": "Deposit",
        "type": "event"
    }
]

# Failures web3 raises for node errors, reverts, bad responses and transport
_CALL_ERRORS = (Web3Exception, RequestException, ValueError, AttributeError)

BlockIdentifier = Union[int, str]


def setup_web3(rpc_url: str) -> Web3:
    """Initialize Web3 connection."""
    w3 = Web3(Web3.HTTPProvider(rpc_url))
    try:
        connected = w3.is_connected()
    except _CALL_ERRORS as e:
        raise GatewayError(f"Error connecting to RPC endpoint {rpc_url}: {e}") from e
    if not connected:
        raise GatewayError(f"Failed to connect to Ethereum node at {rpc_url}")
    return w3


def load_abi(path: str) -> List[dict]:
    """Load a contract ABI from a JSON file."""
    try:
        with open(path, 'r') as f:
            abi = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"ABI file '{path}' not found") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in ABI file '{path}': {e}") from e

    # Truffle/Hardhat artifacts wrap the ABI
    if isinstance(abi, dict) and "abi" in abi:
        abi = abi["abi"]
    if not isinstance(abi, list):
        raise ConfigError(f"ABI file '{path}' does not contain an ABI list")
    return abi


def checksum(address: str) -> str:
    """Validate an address and return its checksum form."""
    if not Web3.is_address(address):
        raise ConfigError(f"Invalid address format: {address}")
    return Web3.to_checksum_address(address)


class DaoGateway:
    """
    Read-only view of a deployed DAO contract.

    All reads are made at `block_identifier`. Pinning a block number makes
    every read and the event scan observe the same chain state.
    """

    def __init__(self, contract, block_identifier: BlockIdentifier = "latest",
                 log_chunk_size: Optional[int] = None):
        if log_chunk_size is not None and log_chunk_size < 1:
            raise ConfigError(f"log chunk size must be positive, got {log_chunk_size}")
        self.contract = contract
        self.block_identifier = block_identifier
        self.log_chunk_size = log_chunk_size

    @classmethod
    def connect(cls, rpc_url: str, address: str = DAO_ADDRESS, abi: Optional[List[dict]] = None,
                block_identifier: BlockIdentifier = "latest",
                log_chunk_size: Optional[int] = None) -> "DaoGateway":
        w3 = setup_web3(rpc_url)
        contract = w3.eth.contract(address=checksum(address), abi=abi or DAO_ABI)
        return cls(contract, block_identifier=block_identifier, log_chunk_size=log_chunk_size)

    def call(self, name: str, *args) -> Any:
        """Call a view function and return its decoded result."""
        try:
            fn = getattr(self.contract.functions, name)
            return fn(*args).call(block_identifier=self.block_identifier)
        except _CALL_ERRORS as e:
            raise GatewayError(f"{name}{args!r} failed: {e}", method=name) from e

    def query_events(self, event_name: str, from_block: int) -> List[Any]:
        """
        Return every log of `event_name` from `from_block` up to the pinned
        block, in chain order.

        Without a chunk size this is a single eth_getLogs request, which some
        providers reject when the result set is large.
        """
        try:
            event = getattr(self.contract.events, event_name)()
            if self.log_chunk_size is None:
                return list(event.get_logs(from_block=from_block, to_block=self.block_identifier))

            last_block = self._last_block()
            logs = []
            start = from_block
            while start <= last_block:
                end = min(start + self.log_chunk_size - 1, last_block)
                logs.extend(event.get_logs(from_block=start, to_block=end))
                start = end + 1
            return logs
        except _CALL_ERRORS as e:
            raise GatewayError(f"{event_name} event query from block {from_block} failed: {e}",
                               method=event_name) from e

    def _last_block(self) -> int:
        if isinstance(self.block_identifier, int):
            return self.block_identifier
        return self.contract.w3.eth.get_block(self.block_identifier)["number"]
