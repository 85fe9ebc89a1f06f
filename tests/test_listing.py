"""Tests for the List Query Engine."""

from raffle_kernel.listing.query import query_list, sortable_view
from raffle_kernel.models.listing import ListQuery, SortField, SortOrder, StatusTab
from raffle_kernel.models.money import Money
from raffle_kernel.models.raffle import CanonicalStatus, RaffleEntry, RawRaffle

NOW = 1_700_000_000
ALICE = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
BOB = "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"
WINNER = "0x2222222222222222222222222222222222222222"


def _make_entry(n: int, **overrides) -> RaffleEntry:
    fields = dict(
        title=f"Raffle {n}",
        description="Win the whole pool",
        entry_fee=Money.of(1_000_000),
        deadline=NOW + 3600,
        max_participants=100,
        current_participants=10,
        contract_status=CanonicalStatus.ACTIVE,
        creator=ALICE,
        winner=None,
        creator_commission_bps=0,
    )
    fields.update(overrides)
    return RaffleEntry(
        address=f"0x{n:040x}",
        raffle=RawRaffle(**fields),
        prize_pool=Money.of(10_000_000),
    )


def _titles(items):
    return [i.raffle.title for i in items]


class TestQueryList:
    def test_sorted_by_deadline_descending(self):
        entries = [
            _make_entry(1, deadline=NOW + 100),
            _make_entry(2, deadline=NOW + 300),
            _make_entry(3, deadline=NOW + 200),
        ]
        page = query_list(entries, ListQuery(), NOW)
        assert _titles(page.items) == ["Raffle 2", "Raffle 3", "Raffle 1"]
        assert page.total == 3

    def test_ties_keep_collection_order(self):
        entries = [_make_entry(n, deadline=NOW + 100) for n in range(1, 5)]
        page = query_list(entries, ListQuery(), NOW)
        assert _titles(page.items) == ["Raffle 1", "Raffle 2", "Raffle 3", "Raffle 4"]

    def test_status_resolved_at_query_time(self):
        entries = [
            _make_entry(1, deadline=NOW - 1),
            _make_entry(2, deadline=NOW + 1),
        ]
        page = query_list(entries, ListQuery(), NOW)
        statuses = {i.raffle.title: i.status for i in page.items}
        assert statuses == {
            "Raffle 1": CanonicalStatus.ENDED,
            "Raffle 2": CanonicalStatus.ACTIVE,
        }

    def test_status_filter_case_insensitive(self):
        entries = [
            _make_entry(1, deadline=NOW - 1),
            _make_entry(2),
            _make_entry(3, winner=WINNER),
        ]
        page = query_list(entries, ListQuery(status_filter="ENDED"), NOW)
        assert _titles(page.items) == ["Raffle 1"]
        assert page.total == 1

    def test_status_filter_mixed_case_with_whitespace(self):
        entries = [_make_entry(1, winner=WINNER), _make_entry(2)]
        page = query_list(entries, ListQuery(status_filter=" Drawn "), NOW)
        assert _titles(page.items) == ["Raffle 1"]

    def test_unknown_status_filter_matches_nothing(self):
        page = query_list([_make_entry(1)], ListQuery(status_filter="pending"), NOW)
        assert page.items == []
        assert page.total == 0

    def test_creator_filter_case_insensitive(self):
        entries = [_make_entry(1), _make_entry(2, creator=BOB)]
        page = query_list(entries, ListQuery(creator_filter=BOB.upper().replace("0X", "0x")), NOW)
        assert _titles(page.items) == ["Raffle 2"]

    def test_pagination_window_and_total(self):
        entries = [_make_entry(n, deadline=NOW + n) for n in range(1, 11)]
        page = query_list(entries, ListQuery(limit=3, offset=2), NOW)
        assert _titles(page.items) == ["Raffle 8", "Raffle 7", "Raffle 6"]
        assert page.total == 10
        assert page.limit == 3
        assert page.offset == 2

    def test_offset_past_end(self):
        page = query_list([_make_entry(1)], ListQuery(offset=5), NOW)
        assert page.items == []
        assert page.total == 1

    def test_limit_capped(self):
        entries = [_make_entry(n) for n in range(250)]
        page = query_list(entries, ListQuery(limit=500), NOW)
        assert len(page.items) == 200
        assert page.total == 250

    def test_listed_pools(self):
        entry = _make_entry(
            1, contract_status=CanonicalStatus.CLAIMED, current_participants=50
        )
        item = query_list([entry], ListQuery(), NOW).items[0]
        assert item.original_prize_pool == Money.of(50_000_000)
        assert item.expected_prize_pool == Money.of(100_000_000)


class TestSortableView:
    def _entries(self):
        return [
            _make_entry(1, entry_fee=Money.of(2_000_000), max_participants=10,
                        creator_commission_bps=100),
            _make_entry(2, entry_fee=Money.of(500_000), max_participants=0,
                        current_participants=7, creator_commission_bps=1000),
            _make_entry(3, entry_fee=Money.of(1_000_000), max_participants=50,
                        creator_commission_bps=500),
        ]

    def test_sort_by_entry_fee(self):
        items = sortable_view(self._entries(), NOW, SortField.ENTRY_FEE, SortOrder.ASC)
        assert _titles(items) == ["Raffle 2", "Raffle 3", "Raffle 1"]

    def test_sort_by_expected_pool(self):
        # 20.00, 3.50 (unlimited: 7 tickets sold), 50.00
        items = sortable_view(self._entries(), NOW, SortField.EXPECTED_PRIZE_POOL, SortOrder.DESC)
        assert _titles(items) == ["Raffle 3", "Raffle 1", "Raffle 2"]

    def test_sort_by_commission(self):
        items = sortable_view(self._entries(), NOW, SortField.CREATOR_COMMISSION_BPS, SortOrder.DESC)
        assert _titles(items) == ["Raffle 2", "Raffle 3", "Raffle 1"]

    def test_descending_sort_is_stable(self):
        entries = [_make_entry(n) for n in range(1, 4)]
        items = sortable_view(entries, NOW, SortField.ENTRY_FEE, SortOrder.DESC)
        assert _titles(items) == ["Raffle 1", "Raffle 2", "Raffle 3"]

    def test_tabs(self):
        entries = [
            _make_entry(1),
            _make_entry(2, deadline=NOW - 1),
            _make_entry(3, winner=WINNER),
            _make_entry(4, contract_status=CanonicalStatus.CANCELLED),
            _make_entry(5, contract_status=CanonicalStatus.CLAIMED, winner=WINNER),
        ]
        by_tab = {
            tab: sorted(_titles(sortable_view(entries, NOW, SortField.ENTRY_FEE, SortOrder.ASC, tab)))
            for tab in StatusTab
        }
        assert by_tab[StatusTab.ACTIVE] == ["Raffle 1"]
        assert by_tab[StatusTab.ENDED] == ["Raffle 2"]
        assert by_tab[StatusTab.COMPLETED] == ["Raffle 3", "Raffle 4", "Raffle 5"]
        assert len(by_tab[StatusTab.ALL]) == 5

    def test_creator_filter(self):
        entries = [_make_entry(1), _make_entry(2, creator=BOB)]
        items = sortable_view(entries, NOW, creator_filter=BOB)
        assert _titles(items) == ["Raffle 2"]
