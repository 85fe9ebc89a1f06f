"""Raffle Kernel — raffle state and economics engine."""

from raffle_kernel.actions.gate import evaluate_actions
from raffle_kernel.fees.engine import compute_creation_fee, compute_pool_base, split_fees
from raffle_kernel.listing.query import query_list, sortable_view
from raffle_kernel.status.resolver import resolve_status
from raffle_kernel.validation.engine import validate_create_params

__all__ = [
    "compute_creation_fee",
    "compute_pool_base",
    "evaluate_actions",
    "query_list",
    "resolve_status",
    "sortable_view",
    "split_fees",
    "validate_create_params",
]
