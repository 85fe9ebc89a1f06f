"""
Service configuration.

Settings are read from RAFFLE_* environment variables (a local .env file is
loaded first). Missing or malformed values fall back to the defaults.
Protocol constants such as fee rates and validation bounds live in the
engine modules, not here: they are fixed by the deployed contracts.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from raffle_kernel.models.listing import DEFAULT_LIMIT, MAX_LIMIT

ENV_PREFIX = "RAFFLE_"


class Settings(BaseModel):
    """Configuration for the API service."""

    chain_id: int = 8453
    chain_name: str = "Base"
    factory_address: str = "0x0000000000000000000000000000000000000000"
    usdc_address: str = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"
    rpc_url: str = "https://mainnet.base.org"
    explorer_url: str = "https://basescan.org"
    cors_origins: List[str] = ["*"]
    default_list_limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    list_cache_seconds: int = 10
    detail_cache_seconds: int = 5
    max_join_tickets: int = Field(default=100, ge=1)
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _get_env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name.upper())
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _get_int(name: str, default: int) -> int:
    raw = _get_env(name)
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return default


def _split_csv(name: str, default: List[str]) -> List[str]:
    raw = _get_env(name)
    if raw is None:
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from the environment."""
    if dotenv:
        load_dotenv(override=False)

    defaults = Settings()
    limit = _get_int("default_list_limit", defaults.default_list_limit)
    if not 1 <= limit <= MAX_LIMIT:
        limit = defaults.default_list_limit

    return Settings(
        chain_id=_get_int("chain_id", defaults.chain_id),
        chain_name=_get_env("chain_name") or defaults.chain_name,
        factory_address=_get_env("factory_address") or defaults.factory_address,
        usdc_address=_get_env("usdc_address") or defaults.usdc_address,
        rpc_url=_get_env("rpc_url") or defaults.rpc_url,
        explorer_url=_get_env("explorer_url") or defaults.explorer_url,
        cors_origins=_split_csv("cors_origins", defaults.cors_origins),
        default_list_limit=limit,
        list_cache_seconds=_get_int("list_cache_seconds", defaults.list_cache_seconds),
        detail_cache_seconds=_get_int("detail_cache_seconds", defaults.detail_cache_seconds),
        max_join_tickets=max(1, _get_int("max_join_tickets", defaults.max_join_tickets)),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        log_file=os.getenv("LOG_FILE") or None,
    )
