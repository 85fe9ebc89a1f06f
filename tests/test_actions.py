"""Tests for the Action Gate."""

import pytest

from raffle_kernel.actions.gate import evaluate_actions
from raffle_kernel.models.actions import RaffleAction, UnavailableReason
from raffle_kernel.models.money import Money
from raffle_kernel.models.raffle import CanonicalStatus, RawRaffle
from raffle_kernel.status.resolver import resolve_status

NOW = 1_700_000_000
RAFFLE = "0x3333333333333333333333333333333333333333"
WINNER = "0x2222222222222222222222222222222222222222"


def _make_raffle(**overrides) -> RawRaffle:
    fields = dict(
        title="Weekly raffle",
        description="Win the whole pool",
        entry_fee=Money.of(1_000_000),
        deadline=NOW + 3600,
        max_participants=100,
        current_participants=50,
        contract_status=CanonicalStatus.ACTIVE,
        creator="0x1111111111111111111111111111111111111111",
        winner=None,
        creator_commission_bps=500,
    )
    fields.update(overrides)
    return RawRaffle(**fields)


def _evaluate(raw: RawRaffle, tickets: int = 1):
    return evaluate_actions(raw, resolve_status(raw, NOW), NOW, tickets, target=RAFFLE)


class TestJoin:
    def test_join_available_when_active(self):
        actions = _evaluate(_make_raffle(), tickets=3)
        assert actions.join.available is True
        assert actions.join.ticket_count == 3
        assert actions.join.total_cost == Money.of(3_000_000)
        assert actions.join.max_purchasable == 50
        assert actions.join.target == RAFFLE
        assert actions.join.function == "joinRaffle(uint256)"

    def test_join_unlimited(self):
        actions = _evaluate(_make_raffle(max_participants=0, current_participants=7))
        assert actions.join.available is True
        assert actions.join.max_purchasable is None

    def test_join_does_not_clamp_large_request(self):
        raw = _make_raffle(max_participants=10, current_participants=9)
        actions = _evaluate(raw, tickets=5)
        assert actions.join.available is True
        assert actions.join.max_purchasable == 1
        assert actions.join.total_cost == Money.of(5_000_000)

    def test_join_full(self):
        actions = _evaluate(_make_raffle(max_participants=50, current_participants=50))
        assert actions.join.available is False
        assert actions.join.reason == UnavailableReason.RAFFLE_FULL

    def test_join_deadline_passed(self):
        actions = _evaluate(_make_raffle(deadline=NOW - 1))
        assert actions.join.reason == UnavailableReason.DEADLINE_PASSED

    def test_join_deadline_checked_before_full(self):
        raw = _make_raffle(deadline=NOW - 1, max_participants=50, current_participants=50)
        assert _evaluate(raw).join.reason == UnavailableReason.DEADLINE_PASSED

    def test_join_after_draw(self):
        raw = _make_raffle(contract_status=CanonicalStatus.DRAWN, winner=WINNER)
        assert _evaluate(raw).join.reason == UnavailableReason.DRAW_ALREADY_INITIATED

    def test_join_while_draw_pending(self):
        raw = _make_raffle(contract_status=CanonicalStatus.ENDED, deadline=NOW - 1)
        assert _evaluate(raw).join.reason == UnavailableReason.DRAW_ALREADY_INITIATED

    @pytest.mark.parametrize("status", [CanonicalStatus.CANCELLED, CanonicalStatus.CLAIMED])
    def test_join_finalized(self, status):
        raw = _make_raffle(contract_status=status)
        assert _evaluate(raw).join.reason == UnavailableReason.CANCELLED_OR_CLAIMED

    def test_join_upcoming_label(self):
        actions = evaluate_actions(_make_raffle(), CanonicalStatus.UPCOMING, NOW)
        assert actions.join.available is True

    def test_ticket_count_must_be_positive(self):
        with pytest.raises(ValueError):
            evaluate_actions(_make_raffle(), CanonicalStatus.ACTIVE, NOW, 0)


class TestDraw:
    def test_draw_after_deadline(self):
        actions = _evaluate(_make_raffle(deadline=NOW - 1))
        assert actions.draw.available is True
        assert actions.draw.function == "drawWinner()"

    def test_draw_when_full_before_deadline(self):
        raw = _make_raffle(max_participants=50, current_participants=50)
        assert _evaluate(raw).draw.available is True

    def test_draw_needs_two_tickets(self):
        raw = _make_raffle(deadline=NOW - 1, current_participants=1)
        assert _evaluate(raw).draw.reason == UnavailableReason.NOT_ENOUGH_TICKETS

    def test_draw_conditions_unmet(self):
        assert _evaluate(_make_raffle()).draw.reason == UnavailableReason.DRAW_CONDITIONS_UNMET

    def test_draw_already_initiated(self):
        raw = _make_raffle(
            contract_status=CanonicalStatus.ENDED, max_participants=50, current_participants=50
        )
        assert _evaluate(raw).draw.reason == UnavailableReason.DRAW_NOT_ACTIVE

    def test_draw_after_winner(self):
        raw = _make_raffle(deadline=NOW - 1, winner=WINNER, contract_status=CanonicalStatus.DRAWN)
        assert _evaluate(raw).draw.reason == UnavailableReason.DRAW_NOT_ACTIVE


class TestClaim:
    def test_claim_when_drawn(self):
        raw = _make_raffle(winner=WINNER, contract_status=CanonicalStatus.DRAWN)
        actions = _evaluate(raw)
        assert actions.claim.available is True
        assert actions.claim.function == "claimPrize()"

    def test_claim_already_claimed(self):
        raw = _make_raffle(winner=WINNER, contract_status=CanonicalStatus.CLAIMED)
        assert _evaluate(raw).claim.reason == UnavailableReason.ALREADY_CLAIMED

    def test_claim_no_winner(self):
        assert _evaluate(_make_raffle()).claim.reason == UnavailableReason.NO_WINNER


class TestCancel:
    def test_cancel_when_active(self):
        assert _evaluate(_make_raffle()).cancel.available is True

    def test_cancel_after_deadline_without_draw(self):
        raw = _make_raffle(deadline=NOW - 1, current_participants=1)
        assert _evaluate(raw).cancel.available is True

    def test_cancel_draw_in_progress(self):
        raw = _make_raffle(contract_status=CanonicalStatus.ENDED, deadline=NOW - 1)
        assert _evaluate(raw).cancel.reason == UnavailableReason.DRAW_IN_PROGRESS

    @pytest.mark.parametrize("status", [CanonicalStatus.CANCELLED, CanonicalStatus.CLAIMED])
    def test_cancel_finalized(self, status):
        raw = _make_raffle(contract_status=status)
        assert _evaluate(raw).cancel.reason == UnavailableReason.ALREADY_FINALIZED

    def test_cancel_drawn(self):
        raw = _make_raffle(winner=WINNER, contract_status=CanonicalStatus.DRAWN)
        assert _evaluate(raw).cancel.reason == UnavailableReason.ALREADY_FINALIZED


class TestWithdrawRefund:
    def test_refund_when_cancelled(self):
        raw = _make_raffle(contract_status=CanonicalStatus.CANCELLED)
        actions = _evaluate(raw)
        assert actions.withdraw_refund.available is True
        assert actions.withdraw_refund.function == "withdrawRefund()"

    def test_refund_not_cancelled(self):
        assert _evaluate(_make_raffle()).withdraw_refund.reason == UnavailableReason.NOT_CANCELLED


class TestMutualExclusion:
    @pytest.mark.parametrize("winner", [None, WINNER])
    @pytest.mark.parametrize("deadline", [NOW - 1, NOW + 1])
    @pytest.mark.parametrize("participants", [0, 1, 100])
    def test_cancelled_only_offers_refund(self, winner, deadline, participants):
        raw = _make_raffle(
            contract_status=CanonicalStatus.CANCELLED,
            winner=winner,
            deadline=deadline,
            current_participants=participants,
        )
        assert _evaluate(raw).available_actions() == [RaffleAction.WITHDRAW_REFUND]

    @pytest.mark.parametrize("winner", [None, WINNER])
    @pytest.mark.parametrize("deadline", [NOW - 1, NOW + 1])
    @pytest.mark.parametrize("participants", [0, 1, 100])
    def test_claimed_offers_nothing(self, winner, deadline, participants):
        raw = _make_raffle(
            contract_status=CanonicalStatus.CLAIMED,
            winner=winner,
            deadline=deadline,
            current_participants=participants,
        )
        assert _evaluate(raw).available_actions() == []

    def test_drawn_only_offers_claim(self):
        raw = _make_raffle(winner=WINNER, contract_status=CanonicalStatus.DRAWN, deadline=NOW - 1)
        assert _evaluate(raw).available_actions() == [RaffleAction.CLAIM]

    def test_serialized_with_contract_names(self):
        data = _evaluate(_make_raffle()).model_dump(mode="json", by_alias=True)
        assert set(data) == {"join", "draw", "claim", "cancel", "withdrawRefund"}
        assert data["join"]["total_cost"] == {"minor": 1_000_000}
