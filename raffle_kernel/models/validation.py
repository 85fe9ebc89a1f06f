"""Validation results for raffle creation parameters."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from raffle_kernel.models.money import Money


class ValidationIssue(BaseModel):
    """One field-level violation. `code` mirrors the contract's custom error."""

    model_config = ConfigDict(frozen=True)

    field: str
    code: str
    message: str


class ValidationResult(BaseModel):
    """All violations found, in rule order. Never short-circuited."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    errors: List[ValidationIssue] = []

    def codes(self) -> List[str]:
        return [e.code for e in self.errors]


class CreateRaffleParams(BaseModel):
    """Parameters for the factory's createRaffle call."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    prize_description: str = ""
    entry_fee: Money
    deadline: int                               # Unix seconds
    max_participants: int                       # 0 = unlimited
    creator_commission_bps: int = 0
