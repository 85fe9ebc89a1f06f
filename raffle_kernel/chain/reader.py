"""
Chain Reader — the read side of the chain, as the kernel consumes it.

The kernel never talks to an RPC node itself. Callers construct a reader and
pass it in; the API factory takes one as a parameter. A web3/multicall-backed
reader belongs outside this package and only needs to satisfy `ChainReader`.

Behavioral Contract:
- `read_raffle` returns a consistent snapshot for one address
- Failures raise ChainReadError; the kernel surfaces them unmodified
- Skipping addresses whose read failed is the caller's decision
"""

from typing import Dict, List, Optional, Protocol

from raffle_kernel.logging_utils import get_logger
from raffle_kernel.models.raffle import RaffleSnapshot, same_address

logger = get_logger(__name__)


class ChainReadError(Exception):
    """Raised when raffle data cannot be read from chain."""
    pass


class RaffleNotFound(ChainReadError):
    """Raised when an address does not hold a readable raffle."""
    pass


class ChainReader(Protocol):
    def list_raffle_addresses(self, creator: Optional[str] = None) -> List[str]:
        ...

    def read_raffle(self, address: str) -> RaffleSnapshot:
        ...


class InMemoryChainReader:
    """
    In-memory reader for tests and local development.
    Keeps snapshots in factory registration order.
    """

    def __init__(self, snapshots: Optional[List[RaffleSnapshot]] = None):
        self._snapshots: Dict[str, RaffleSnapshot] = {}
        self._failing: Dict[str, str] = {}
        for snapshot in snapshots or []:
            self.upsert(snapshot)

    def upsert(self, snapshot: RaffleSnapshot) -> None:
        """Insert or replace the snapshot for its address."""
        self._snapshots[snapshot.address.lower()] = snapshot

    def fail_reads(self, address: str, message: str = "execution reverted") -> None:
        """Make subsequent reads of `address` raise ChainReadError."""
        self._failing[address.lower()] = message

    def list_raffle_addresses(self, creator: Optional[str] = None) -> List[str]:
        return [
            s.address for s in self._snapshots.values()
            if creator is None or same_address(s.raffle.creator, creator)
        ]

    def read_raffle(self, address: str) -> RaffleSnapshot:
        key = address.lower()
        if key in self._failing:
            raise ChainReadError(f"Failed to read raffle {address}: {self._failing[key]}")
        snapshot = self._snapshots.get(key)
        if snapshot is None:
            raise RaffleNotFound(f"No raffle at {address}")
        return snapshot


def read_many(reader: ChainReader, addresses: List[str]) -> List[RaffleSnapshot]:
    """Read each address, skipping (and logging) the ones that fail."""
    snapshots = []
    for address in addresses:
        try:
            snapshots.append(reader.read_raffle(address))
        except ChainReadError as exc:
            logger.warning("Skipping raffle %s: %s", address, exc)
    return snapshots
