"""Action decisions — what the action gate says about each raffle action."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from raffle_kernel.models.money import Money


class RaffleAction(str, Enum):
    JOIN = "join"
    DRAW = "draw"
    CLAIM = "claim"
    CANCEL = "cancel"
    WITHDRAW_REFUND = "withdrawRefund"


# Contract entry point for each action, handed to the calldata encoder.
ACTION_FUNCTIONS = {
    RaffleAction.JOIN: "joinRaffle(uint256)",
    RaffleAction.DRAW: "drawWinner()",
    RaffleAction.CLAIM: "claimPrize()",
    RaffleAction.CANCEL: "cancelRaffle()",
    RaffleAction.WITHDRAW_REFUND: "withdrawRefund()",
}


class UnavailableReason(str, Enum):
    """Enumerated reasons an action cannot currently be taken."""
    CANCELLED_OR_CLAIMED = "Raffle is cancelled or claimed"
    DRAW_ALREADY_INITIATED = "Raffle draw already initiated"
    DEADLINE_PASSED = "Deadline has passed"
    RAFFLE_FULL = "Raffle is full"
    DRAW_NOT_ACTIVE = "Draw already initiated or raffle not active"
    NOT_ENOUGH_TICKETS = "Need at least 2 tickets sold"
    DRAW_CONDITIONS_UNMET = "Deadline not reached and raffle not full"
    ALREADY_CLAIMED = "Prize already claimed"
    NO_WINNER = "No winner drawn yet"
    DRAW_IN_PROGRESS = "Draw in progress, cannot cancel"
    ALREADY_FINALIZED = "Raffle already drawn, cancelled, or claimed"
    NOT_CANCELLED = "Raffle not cancelled"


class ActionDecision(BaseModel):
    """
    Tagged result for one action: unavailable with a reason, or available
    with the arguments the calldata encoder needs.
    """

    model_config = ConfigDict(frozen=True)

    action: RaffleAction
    available: bool
    reason: Optional[UnavailableReason] = None

    # Populated only when available
    target: Optional[str] = None            # Raffle contract address
    function: Optional[str] = None          # Contract function signature
    ticket_count: Optional[int] = Field(default=None, ge=1)
    total_cost: Optional[Money] = None      # Payment required (join only)
    max_purchasable: Optional[int] = None   # None = uncapped (join only)

    @classmethod
    def unavailable(cls, action: RaffleAction, reason: UnavailableReason) -> "ActionDecision":
        return cls(action=action, available=False, reason=reason)

    @classmethod
    def allow(cls, action: RaffleAction, target: Optional[str], **parameters) -> "ActionDecision":
        return cls(
            action=action,
            available=True,
            target=target,
            function=ACTION_FUNCTIONS[action],
            **parameters,
        )


class ActionSet(BaseModel):
    """Decisions for all five raffle actions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    join: ActionDecision
    draw: ActionDecision
    claim: ActionDecision
    cancel: ActionDecision
    withdraw_refund: ActionDecision = Field(alias="withdrawRefund")

    def available_actions(self) -> list:
        return [
            d.action for d in (self.join, self.draw, self.claim, self.cancel, self.withdraw_refund)
            if d.available
        ]
