"""List queries — filter, sort and pagination parameters and results."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from raffle_kernel.models.money import Money
from raffle_kernel.models.raffle import CanonicalStatus, RawRaffle

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


class ListQuery(BaseModel):
    """Query for the default (deadline-descending) raffle list."""

    status_filter: Optional[str] = None         # Status label, case-insensitive
    creator_filter: Optional[str] = None        # Address, case-insensitive
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        return max(0, min(value, MAX_LIMIT))

    @field_validator("offset")
    @classmethod
    def _clamp_offset(cls, value: int) -> int:
        return max(value, 0)


class StatusTab(str, Enum):
    """Coarse status buckets used by the explore view."""
    ALL = "all"
    ACTIVE = "active"
    ENDED = "ended"
    COMPLETED = "completed"     # drawn, cancelled or claimed


class SortField(str, Enum):
    ENTRY_FEE = "entry_fee"
    EXPECTED_PRIZE_POOL = "expected_prize_pool"
    CREATOR_COMMISSION_BPS = "creator_commission_bps"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ListedRaffle(BaseModel):
    """A raffle as it appears in a list result, with its resolved status."""

    model_config = ConfigDict(frozen=True)

    address: str
    raffle: RawRaffle
    status: CanonicalStatus
    prize_pool: Money
    original_prize_pool: Money      # entry_fee * tickets sold
    expected_prize_pool: Money


class ListPage(BaseModel):
    """One page of results plus the filtered total before pagination."""

    items: List[ListedRaffle]
    total: int = Field(ge=0)
    limit: int
    offset: int
