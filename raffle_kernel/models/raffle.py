"""Raffle — raw on-chain fields and the canonical lifecycle status."""

from enum import IntEnum
from typing import List, Optional

from eth_utils import is_address
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from raffle_kernel.models.money import Money

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_zero_address(address: Optional[str]) -> bool:
    return address is None or address.lower() == ZERO_ADDRESS


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive address equality (checksummed vs lower-case)."""
    if a is None or b is None:
        return False
    return a.lower() == b.lower()


class CanonicalStatus(IntEnum):
    """
    Lifecycle status as the engine sees it. Numbering matches the contract's
    status enum so the two can be compared directly.
    """
    UPCOMING = 0    # Not yet observed on chain; never derived from live data
    ACTIVE = 1
    ENDED = 2
    DRAWN = 3
    CANCELLED = 4
    CLAIMED = 5

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "CanonicalStatus":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown raffle status: {label!r}") from None


class RawRaffle(BaseModel):
    """
    Raffle detail fields exactly as read from the contract.

    `contract_status` is the contract's own status field. It lags reality
    (the contract never flips ACTIVE -> ENDED on its own), so consumers go
    through the status resolver instead of reading it directly.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    entry_fee: Money
    deadline: int                                       # Unix seconds
    max_participants: int = Field(ge=0)                 # 0 = unlimited
    current_participants: int = Field(ge=0)             # Tickets sold, not wallets
    contract_status: int = Field(ge=0, le=5)
    creator: str
    winner: Optional[str] = None                        # Zero address -> None
    creator_commission_bps: int = Field(ge=0, le=1000)

    @field_validator("contract_status", mode="before")
    @classmethod
    def _plain_status(cls, value):
        return int(value)

    @field_validator("winner")
    @classmethod
    def _normalize_winner(cls, value: Optional[str]) -> Optional[str]:
        return None if is_zero_address(value) else value

    @model_validator(mode="after")
    def _check_capacity(self) -> "RawRaffle":
        if self.max_participants and self.current_participants > self.max_participants:
            raise ValueError(
                f"current_participants ({self.current_participants}) exceeds "
                f"max_participants ({self.max_participants})"
            )
        return self

    @property
    def is_unlimited(self) -> bool:
        return self.max_participants == 0

    @property
    def is_full(self) -> bool:
        return not self.is_unlimited and self.current_participants >= self.max_participants

    @property
    def remaining_capacity(self) -> Optional[int]:
        """Tickets still purchasable, or None when the raffle is uncapped."""
        if self.is_unlimited:
            return None
        return self.max_participants - self.current_participants

    @property
    def has_winner(self) -> bool:
        return self.winner is not None


class RaffleEntry(BaseModel):
    """One raffle in a collection: its address, raw fields and pool balance."""

    model_config = ConfigDict(frozen=True)

    address: str
    raffle: RawRaffle
    prize_pool: Money = Money(minor=0)


class RaffleSnapshot(RaffleEntry):
    """Everything the chain reader returns for a single raffle address."""

    prize_description: str = ""
    participants: List[str] = []            # One element per ticket


def validate_address(address: str) -> bool:
    """True for a well-formed 20-byte hex address."""
    return bool(address) and is_address(address)
