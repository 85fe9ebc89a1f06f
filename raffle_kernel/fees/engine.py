"""
Fee Engine — creation fee, pool reconstruction and the three-way fee split.

All arithmetic is integer Money arithmetic. Split order is fixed: the
platform fee comes off the gross pool first, the creator commission is
taken from what remains, and the winner receives the rest.
"""

from typing import Dict, List, Optional

from raffle_kernel.models.fees import FeeBreakdown
from raffle_kernel.models.money import Money
from raffle_kernel.models.raffle import RawRaffle

CREATION_FEE = Money(minor=1_000_000)       # $1.00 flat, anti-spam
PLATFORM_FEE_BPS = 200                      # 2% of the pool
MAX_CREATOR_COMMISSION_BPS = 1_000


def compute_creation_fee() -> Money:
    """Flat fee charged by the factory on createRaffle."""
    return CREATION_FEE


def compute_pool_base(raw: RawRaffle, on_chain_balance: Money) -> Money:
    """
    Pool to split. Uses the live balance when there is one; after a claim or
    a full refund cycle the balance is drained, so the pool is reconstructed
    from entry fee times tickets sold.
    """
    if on_chain_balance > Money.zero():
        return on_chain_balance
    return raw.entry_fee.times(raw.current_participants)


def split_fees(pool_base: Money, creator_commission_bps: int) -> FeeBreakdown:
    """Split `pool_base` into platform fee, creator commission and payout."""
    if not 0 <= creator_commission_bps <= MAX_CREATOR_COMMISSION_BPS:
        raise ValueError(
            f"creator_commission_bps must be 0-{MAX_CREATOR_COMMISSION_BPS}, "
            f"got {creator_commission_bps}"
        )
    platform_fee = pool_base.mul_bps(PLATFORM_FEE_BPS)
    after_platform = pool_base - platform_fee
    creator_commission = after_platform.mul_bps(creator_commission_bps)
    winner_payout = after_platform - creator_commission
    return FeeBreakdown(
        pool_base=pool_base,
        platform_fee=platform_fee,
        creator_commission=creator_commission,
        winner_payout=winner_payout,
    )


def fee_report(raw: RawRaffle, on_chain_balance: Money) -> FeeBreakdown:
    return split_fees(
        compute_pool_base(raw, on_chain_balance),
        raw.creator_commission_bps,
    )


def expected_prize_pool(raw: RawRaffle) -> Money:
    """
    Entry fee times the ticket cap, or times tickets sold for uncapped
    raffles (which have no fixed projection, so the value grows with sales).
    """
    multiplier = raw.max_participants if raw.max_participants > 0 else raw.current_participants
    return raw.entry_fee.times(multiplier)


def project_max_pool(entry_fee: Money, max_participants: int) -> Optional[Money]:
    """Largest possible pool for a raffle being created; None if uncapped."""
    if max_participants <= 0:
        return None
    return entry_fee.times(max_participants)


def ticket_tally(participants: List[str]) -> Dict[str, int]:
    """Tickets held per wallet, keyed by lower-cased address in first-seen order."""
    tally: Dict[str, int] = {}
    for address in participants:
        key = address.lower()
        tally[key] = tally.get(key, 0) + 1
    return tally


def refund_amount(raw: RawRaffle, participants: List[str], wallet: str) -> Money:
    """What withdrawRefund would return to `wallet`: entry fee per ticket held."""
    tickets = ticket_tally(participants).get(wallet.lower(), 0)
    return raw.entry_fee.times(tickets)
