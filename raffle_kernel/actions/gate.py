"""
Action Gate — decides which raffle actions are currently permitted.

Behavioral Contract:
- Accepts raw raffle fields, their resolved status and the evaluation time
- Returns one ActionDecision per action (join, draw, claim, cancel, withdrawRefund)
- Unavailability is a normal outcome carrying an enumerated reason
- Preconditions are mutually exclusive where the contract would reject one
  of two actions, so a CANCELLED raffle only offers withdrawRefund and a
  CLAIMED raffle offers nothing
- Produces call arguments, never encoded calldata
"""

from typing import Optional

from raffle_kernel.models.actions import (
    ActionDecision,
    ActionSet,
    RaffleAction,
    UnavailableReason,
)
from raffle_kernel.models.raffle import CanonicalStatus, RawRaffle
from raffle_kernel.status.resolver import is_draw_pending

_OPEN = (CanonicalStatus.UPCOMING, CanonicalStatus.ACTIVE)
_FINALIZED = (CanonicalStatus.CANCELLED, CanonicalStatus.CLAIMED)


def _gate_status(raw: RawRaffle, status: CanonicalStatus) -> CanonicalStatus:
    """
    Collapse the resolved status onto the contract's view of the lifecycle.

    ENDED in the gate means the draw is in progress on chain. A raffle whose
    deadline merely passed is still open to the contract (it can be drawn or
    cancelled), so it is gated as ACTIVE; the deadline check then blocks join.
    """
    if is_draw_pending(raw, status):
        return CanonicalStatus.ENDED
    if status == CanonicalStatus.ENDED:
        return CanonicalStatus.ACTIVE
    return status


def _evaluate_join(
    raw: RawRaffle,
    status: CanonicalStatus,
    now: int,
    ticket_count: int,
    target: Optional[str],
) -> ActionDecision:
    if status in _FINALIZED:
        return ActionDecision.unavailable(RaffleAction.JOIN, UnavailableReason.CANCELLED_OR_CLAIMED)
    if status not in _OPEN:
        return ActionDecision.unavailable(RaffleAction.JOIN, UnavailableReason.DRAW_ALREADY_INITIATED)
    if raw.deadline <= now:
        return ActionDecision.unavailable(RaffleAction.JOIN, UnavailableReason.DEADLINE_PASSED)
    if raw.is_full:
        return ActionDecision.unavailable(RaffleAction.JOIN, UnavailableReason.RAFFLE_FULL)

    # Callers clamp ticket_count to remaining capacity; the gate only reports it.
    return ActionDecision.allow(
        RaffleAction.JOIN,
        target,
        ticket_count=ticket_count,
        total_cost=raw.entry_fee.times(ticket_count),
        max_purchasable=raw.remaining_capacity,
    )


def _evaluate_draw(
    raw: RawRaffle, status: CanonicalStatus, now: int, target: Optional[str]
) -> ActionDecision:
    if status not in _OPEN:
        return ActionDecision.unavailable(RaffleAction.DRAW, UnavailableReason.DRAW_NOT_ACTIVE)
    if raw.current_participants < 2:
        return ActionDecision.unavailable(RaffleAction.DRAW, UnavailableReason.NOT_ENOUGH_TICKETS)
    if raw.deadline > now and not raw.is_full:
        return ActionDecision.unavailable(RaffleAction.DRAW, UnavailableReason.DRAW_CONDITIONS_UNMET)
    return ActionDecision.allow(RaffleAction.DRAW, target)


def _evaluate_claim(status: CanonicalStatus, target: Optional[str]) -> ActionDecision:
    if status == CanonicalStatus.DRAWN:
        return ActionDecision.allow(RaffleAction.CLAIM, target)
    if status == CanonicalStatus.CLAIMED:
        return ActionDecision.unavailable(RaffleAction.CLAIM, UnavailableReason.ALREADY_CLAIMED)
    return ActionDecision.unavailable(RaffleAction.CLAIM, UnavailableReason.NO_WINNER)


def _evaluate_cancel(status: CanonicalStatus, target: Optional[str]) -> ActionDecision:
    if status in _OPEN:
        return ActionDecision.allow(RaffleAction.CANCEL, target)
    if status == CanonicalStatus.ENDED:
        return ActionDecision.unavailable(RaffleAction.CANCEL, UnavailableReason.DRAW_IN_PROGRESS)
    return ActionDecision.unavailable(RaffleAction.CANCEL, UnavailableReason.ALREADY_FINALIZED)


def _evaluate_withdraw_refund(status: CanonicalStatus, target: Optional[str]) -> ActionDecision:
    if status == CanonicalStatus.CANCELLED:
        return ActionDecision.allow(RaffleAction.WITHDRAW_REFUND, target)
    return ActionDecision.unavailable(RaffleAction.WITHDRAW_REFUND, UnavailableReason.NOT_CANCELLED)


def evaluate_actions(
    raw: RawRaffle,
    status: CanonicalStatus,
    now: int,
    requested_ticket_count: int = 1,
    target: Optional[str] = None,
) -> ActionSet:
    """
    Evaluate every raffle action for `raw` in `status` at time `now`.

    `requested_ticket_count` only affects the join cost and must be at least 1.
    `target` is the raffle contract address echoed into available decisions.
    """
    if requested_ticket_count < 1:
        raise ValueError(
            f"requested_ticket_count must be at least 1, got {requested_ticket_count}"
        )

    gate_status = _gate_status(raw, status)
    return ActionSet(
        join=_evaluate_join(raw, gate_status, now, requested_ticket_count, target),
        draw=_evaluate_draw(raw, gate_status, now, target),
        claim=_evaluate_claim(gate_status, target),
        cancel=_evaluate_cancel(gate_status, target),
        withdraw_refund=_evaluate_withdraw_refund(gate_status, target),
    )
