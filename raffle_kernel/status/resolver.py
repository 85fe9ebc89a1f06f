"""
Status Resolver — maps raw contract fields onto the canonical lifecycle status.

The deployed contract only moves its status field when a transaction touches
it, so ACTIVE is reported long after the deadline has passed. This adapter is
the single place that corrects for that.

Priority (first match wins):
  1. contract says CANCELLED      -> CANCELLED
  2. contract says CLAIMED        -> CLAIMED
  3. a winner is assigned         -> DRAWN
  4. deadline <= now              -> ENDED
  5. otherwise                    -> ACTIVE

Cancellation and claim beat everything; a drawn winner beats an elapsed
deadline. UPCOMING is never produced here.
"""

from raffle_kernel.models.raffle import CanonicalStatus, RawRaffle


def resolve_status(raw: RawRaffle, now: int) -> CanonicalStatus:
    """Resolve the canonical status of `raw` as of unix time `now`."""
    if raw.contract_status == CanonicalStatus.CANCELLED:
        return CanonicalStatus.CANCELLED
    if raw.contract_status == CanonicalStatus.CLAIMED:
        return CanonicalStatus.CLAIMED
    if raw.has_winner:
        return CanonicalStatus.DRAWN
    if raw.deadline <= now:
        return CanonicalStatus.ENDED
    return CanonicalStatus.ACTIVE


def is_draw_pending(raw: RawRaffle, status: CanonicalStatus) -> bool:
    """
    True when the contract itself reports ENDED: drawWinner was called and the
    randomness request is outstanding. This differs from an ENDED status that
    was derived from the deadline while the contract still says ACTIVE.
    """
    return (
        status in (CanonicalStatus.UPCOMING, CanonicalStatus.ACTIVE, CanonicalStatus.ENDED)
        and raw.contract_status == CanonicalStatus.ENDED
    )
