"""
Raffle Kernel API — FastAPI endpoints.

Exposes the engine over HTTP for:
- Raffle listing (default and explore views)
- Raffle detail with canonical status, fee split and action availability
- Creation parameter validation and createRaffle arguments
- Static protocol metadata (config, validation rules)

Each request captures `now` once from the injected clock and evaluates every
raffle in the response against it.
"""

import time
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from raffle_kernel.actions.gate import evaluate_actions
from raffle_kernel.chain.reader import (
    ChainReader,
    ChainReadError,
    InMemoryChainReader,
    RaffleNotFound,
    read_many,
)
from raffle_kernel.config import Settings, load_settings
from raffle_kernel.fees.engine import (
    MAX_CREATOR_COMMISSION_BPS,
    PLATFORM_FEE_BPS,
    compute_creation_fee,
    expected_prize_pool,
    fee_report,
    project_max_pool,
    refund_amount,
    ticket_tally,
)
from raffle_kernel.listing.query import query_list, sortable_view
from raffle_kernel.logging_utils import configure_logging, get_logger
from raffle_kernel.models.listing import (
    MAX_LIMIT,
    ListedRaffle,
    ListQuery,
    SortField,
    SortOrder,
    StatusTab,
)
from raffle_kernel.models.money import Money
from raffle_kernel.models.raffle import CanonicalStatus, RawRaffle, validate_address
from raffle_kernel.models.validation import CreateRaffleParams
from raffle_kernel.status.resolver import resolve_status
from raffle_kernel.validation.engine import (
    VALIDATION_RULES,
    creation_arguments,
    validate_params,
)

logger = get_logger(__name__)

CREATE_RAFFLE_FUNCTION = (
    "createRaffle(string,string,string,uint256,uint256,uint256,uint256)"
)


# --- Request Models ---

class CreateRaffleRequest(BaseModel):
    title: str
    description: str
    prize_description: str = ""
    entry_fee: str                      # Decimal USDC, e.g. "1.50"
    deadline: int
    max_participants: int = 0
    creator_commission_bps: int = 0


# --- Serialization ---

def _raffle_fields(address: str, raw: RawRaffle, status: CanonicalStatus) -> dict:
    return {
        "address": address,
        "title": raw.title,
        "description": raw.description,
        "entry_fee": str(raw.entry_fee.minor),
        "entry_fee_formatted": raw.entry_fee.format_usdc(),
        "deadline": raw.deadline,
        "max_participants": raw.max_participants,
        "current_participants": raw.current_participants,
        "contract_status": raw.contract_status,
        "status": int(status),
        "status_label": status.name,
        "creator": raw.creator,
        "winner": raw.winner,
        "creator_commission_bps": raw.creator_commission_bps,
    }


def _serialize_listed(item: ListedRaffle) -> dict:
    data = _raffle_fields(item.address, item.raffle, item.status)
    data.update({
        "prize_pool": str(item.prize_pool.minor),
        "prize_pool_formatted": item.prize_pool.format_usdc(),
        "original_prize_pool": str(item.original_prize_pool.minor),
        "original_prize_pool_formatted": item.original_prize_pool.format_usdc(),
        "expected_prize_pool": str(item.expected_prize_pool.minor),
        "expected_prize_pool_formatted": item.expected_prize_pool.format_usdc(),
    })
    return data


def _serialize_money(amount: Money) -> dict:
    return {"raw": str(amount.minor), "formatted": amount.format_usdc()}


def _default_clock() -> int:
    return int(time.time())


# --- Application Factory ---

def create_app(
    chain_reader: Optional[ChainReader] = None,
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], int]] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    config = settings or load_settings()
    configure_logging(config.log_level, config.log_file)
    reader = chain_reader if chain_reader is not None else InMemoryChainReader()
    now_fn = clock or _default_clock

    app = FastAPI(
        title="Raffle Kernel API",
        description="Raffle state and economics engine",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.state.settings = config
    app.state.chain_reader = reader
    app.state.clock = now_fn

    def _require_address(value: str, what: str) -> None:
        if not validate_address(value):
            raise HTTPException(400, f"Invalid {what} address")

    def _read_entries(creator: Optional[str]):
        try:
            addresses = reader.list_raffle_addresses(creator)
        except ChainReadError as exc:
            logger.error("Listing raffle addresses failed: %s", exc)
            raise HTTPException(502, f"Failed to fetch raffles from chain: {exc}")
        return read_many(reader, addresses)

    # === LISTING ===

    @app.get("/raffles")
    def list_raffles(
        response: Response,
        status: Optional[str] = None,
        creator: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ):
        """Raffles sorted by deadline, most recent first."""
        if creator:
            _require_address(creator, "creator")
        now = now_fn()

        entries = _read_entries(creator)
        page = query_list(
            entries,
            ListQuery(
                status_filter=status,
                creator_filter=creator,
                limit=config.default_list_limit if limit is None else limit,
                offset=offset,
            ),
            now,
        )
        response.headers["Cache-Control"] = f"public, s-maxage={config.list_cache_seconds}"
        return {
            "raffles": [_serialize_listed(i) for i in page.items],
            "total": page.total,
            "limit": page.limit,
            "offset": page.offset,
        }

    @app.get("/raffles/explore")
    def explore_raffles(
        tab: StatusTab = StatusTab.ALL,
        sort_by: SortField = SortField.EXPECTED_PRIZE_POOL,
        order: SortOrder = SortOrder.DESC,
        creator: Optional[str] = None,
    ):
        """Browse view with status tabs and selectable sort."""
        if creator:
            _require_address(creator, "creator")
        now = now_fn()

        items = sortable_view(
            _read_entries(creator),
            now,
            sort_by=sort_by,
            order=order,
            tab=tab,
            creator_filter=creator,
        )
        return {
            "raffles": [_serialize_listed(i) for i in items],
            "total": len(items),
            "tab": tab.value,
            "sort_by": sort_by.value,
            "order": order.value,
        }

    # === DETAIL ===

    @app.get("/raffles/{address}")
    def get_raffle(
        address: str,
        response: Response,
        tickets: int = Query(1, ge=1),
        wallet: Optional[str] = None,
    ):
        """Full raffle view: status, fees, participants and actions."""
        _require_address(address, "raffle")
        if wallet:
            _require_address(wallet, "wallet")
        if tickets > config.max_join_tickets:
            raise HTTPException(
                400, f"tickets must be between 1 and {config.max_join_tickets}"
            )
        now = now_fn()

        try:
            snapshot = reader.read_raffle(address)
        except RaffleNotFound:
            raise HTTPException(404, "Raffle not found")
        except ChainReadError as exc:
            logger.error("Reading raffle %s failed: %s", address, exc)
            raise HTTPException(502, f"Failed to fetch raffle from chain: {exc}")

        raw = snapshot.raffle
        status = resolve_status(raw, now)
        fees = fee_report(raw, snapshot.prize_pool)
        actions = evaluate_actions(
            raw, status, now, requested_ticket_count=tickets, target=snapshot.address
        )
        tally = ticket_tally(snapshot.participants)

        data = _raffle_fields(snapshot.address, raw, status)
        data.update({
            "prize_description": snapshot.prize_description,
            "prize_pool": _serialize_money(snapshot.prize_pool),
            "expected_prize_pool": _serialize_money(expected_prize_pool(raw)),
            "fees": {
                "pool_base": _serialize_money(fees.pool_base),
                "platform_fee": _serialize_money(fees.platform_fee),
                "creator_commission": _serialize_money(fees.creator_commission),
                "winner_payout": _serialize_money(fees.winner_payout),
            },
            "participants": snapshot.participants,
            "unique_wallets": len(tally),
            "actions": actions.model_dump(mode="json", by_alias=True),
        })
        if wallet:
            # Refunds exist only once the raffle is cancelled
            refund = None
            if status == CanonicalStatus.CANCELLED:
                refund = _serialize_money(refund_amount(raw, snapshot.participants, wallet))
            data["wallet"] = {
                "address": wallet,
                "tickets": tally.get(wallet.lower(), 0),
                "refund_amount": refund,
            }
        response.headers["Cache-Control"] = f"public, s-maxage={config.detail_cache_seconds}"
        return data

    # === CREATION ===

    @app.post("/factory/create-params")
    def create_params(req: CreateRaffleRequest):
        """Validate creation parameters and return the createRaffle call."""
        try:
            entry_fee = Money.from_decimal_string(req.entry_fee)
        except ValueError as exc:
            raise HTTPException(400, {"error": "Invalid entry_fee", "details": [str(exc)]})

        params = CreateRaffleParams(
            title=req.title,
            description=req.description,
            prize_description=req.prize_description,
            entry_fee=entry_fee,
            deadline=req.deadline,
            max_participants=req.max_participants,
            creator_commission_bps=req.creator_commission_bps,
        )
        now = now_fn()
        result = validate_params(params, now)
        if not result.ok:
            logger.info("Rejected raffle parameters: %s", ", ".join(result.codes()))
            raise HTTPException(400, {
                "error": "Validation failed",
                "details": [e.model_dump() for e in result.errors],
            })

        creation_fee = compute_creation_fee()
        max_pool = project_max_pool(entry_fee, params.max_participants)
        return {
            "to": config.factory_address,
            "function": CREATE_RAFFLE_FUNCTION,
            "args": creation_arguments(params, now),
            "creation_fee": _serialize_money(creation_fee),
            "max_prize_pool": _serialize_money(max_pool) if max_pool is not None else None,
            "note": "Approve the creation fee in USDC for the factory before calling createRaffle",
        }

    # === METADATA ===

    @app.get("/validation-rules")
    def validation_rules(response: Response):
        """Acceptance rules for createRaffle, machine-readable."""
        response.headers["Cache-Control"] = "public, s-maxage=3600"
        return {
            "rules": VALIDATION_RULES,
            "creation_fee": _serialize_money(compute_creation_fee()),
        }

    @app.get("/config")
    def get_config(response: Response):
        """Chain, contract and protocol parameters."""
        response.headers["Cache-Control"] = "public, s-maxage=3600"
        return {
            "chain_id": config.chain_id,
            "chain_name": config.chain_name,
            "factory_address": config.factory_address,
            "usdc_address": config.usdc_address,
            "rpc_url": config.rpc_url,
            "explorer_url": config.explorer_url,
            "status_enum": {str(int(s)): s.name for s in CanonicalStatus},
            "validation_rules": VALIDATION_RULES,
            "fees": {
                "creation_fee": _serialize_money(compute_creation_fee()),
                "platform_fee_bps": PLATFORM_FEE_BPS,
                "max_creator_commission_bps": MAX_CREATOR_COMMISSION_BPS,
            },
            "list_limits": {"default": config.default_list_limit, "max": MAX_LIMIT},
        }

    return app


# Default application instance
app = create_app()
