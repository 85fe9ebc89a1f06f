"""
List Query Engine — filters, sorts and paginates raffle collections.

Every item is resolved against the same `now`, so a single response never
mixes statuses computed at different instants. All sorts are stable: ties
keep the order of the input collection.
"""

from typing import Iterable, List, Optional

from raffle_kernel.fees.engine import expected_prize_pool
from raffle_kernel.models.listing import (
    ListedRaffle,
    ListPage,
    ListQuery,
    SortField,
    SortOrder,
    StatusTab,
)
from raffle_kernel.models.raffle import CanonicalStatus, RaffleEntry, same_address
from raffle_kernel.status.resolver import resolve_status

TAB_STATUSES = {
    StatusTab.ACTIVE: {CanonicalStatus.UPCOMING, CanonicalStatus.ACTIVE},
    StatusTab.ENDED: {CanonicalStatus.ENDED},
    StatusTab.COMPLETED: {
        CanonicalStatus.DRAWN,
        CanonicalStatus.CANCELLED,
        CanonicalStatus.CLAIMED,
    },
}


def _to_listed(entry: RaffleEntry, now: int) -> ListedRaffle:
    raw = entry.raffle
    return ListedRaffle(
        address=entry.address,
        raffle=raw,
        status=resolve_status(raw, now),
        prize_pool=entry.prize_pool,
        original_prize_pool=raw.entry_fee.times(raw.current_participants),
        expected_prize_pool=expected_prize_pool(raw),
    )


def _sort_key(field: SortField):
    if field == SortField.ENTRY_FEE:
        return lambda item: item.raffle.entry_fee.minor
    if field == SortField.EXPECTED_PRIZE_POOL:
        return lambda item: item.expected_prize_pool.minor
    return lambda item: item.raffle.creator_commission_bps


def query_list(
    entries: Iterable[RaffleEntry],
    query: ListQuery,
    now: int,
) -> ListPage:
    """
    Resolve, filter by creator and status label, sort by deadline descending,
    then cut the [offset, offset + limit) window.
    """
    wanted: Optional[CanonicalStatus] = None
    if query.status_filter:
        try:
            wanted = CanonicalStatus.from_label(query.status_filter)
        except ValueError:
            # Unknown labels match nothing
            return ListPage(items=[], total=0, limit=query.limit, offset=query.offset)

    filtered: List[ListedRaffle] = []
    for entry in entries:
        if query.creator_filter and not same_address(entry.raffle.creator, query.creator_filter):
            continue
        listed = _to_listed(entry, now)
        if wanted is not None and listed.status != wanted:
            continue
        filtered.append(listed)

    filtered.sort(key=lambda item: item.raffle.deadline, reverse=True)

    return ListPage(
        items=filtered[query.offset:query.offset + query.limit],
        total=len(filtered),
        limit=query.limit,
        offset=query.offset,
    )


def sortable_view(
    entries: Iterable[RaffleEntry],
    now: int,
    sort_by: SortField = SortField.EXPECTED_PRIZE_POOL,
    order: SortOrder = SortOrder.DESC,
    tab: StatusTab = StatusTab.ALL,
    creator_filter: Optional[str] = None,
) -> List[ListedRaffle]:
    """Explore view: coarse status tabs and a choice of sort field and order."""
    wanted = TAB_STATUSES.get(tab)
    items = []
    for entry in entries:
        if creator_filter and not same_address(entry.raffle.creator, creator_filter):
            continue
        listed = _to_listed(entry, now)
        if wanted is not None and listed.status not in wanted:
            continue
        items.append(listed)

    # list.sort keeps equal elements in input order even with reverse=True
    items.sort(key=_sort_key(sort_by), reverse=(order == SortOrder.DESC))
    return items
