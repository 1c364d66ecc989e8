"""
Client configuration: network profile, RPC endpoint, contract id, gas,
stake unit, digest algorithm and HTTP retry/timeouts.

- Loads sane defaults and supports overrides via environment variables (TREASURE_*).
- Network profiles pick the RPC endpoint unless an explicit URL is given.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .constants import DEFAULT_CONTRACT_ID, DEFAULT_GAS, YOCTO_PER_COIN
from .utils.hash import get_hasher
from .version import __version__

NETWORK_RPC_URLS: Dict[str, str] = {
    "testnet": "https://rpc.testnet.near.org",
    "mainnet": "https://rpc.mainnet.near.org",
    "localnet": "http://127.0.0.1:3030",
}

DEFAULT_NETWORK = "testnet"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...]) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ValueError(f"URL must start with {allowed}, got: {url!r}")
    return url


def _stake_unit(raw: str) -> int:
    # "coin" stakes whole coins per slot, which is what the deployed contract checks.
    if raw.strip().lower() == "coin":
        return YOCTO_PER_COIN
    return int(raw)


def _rpc_for_network(network: str) -> str:
    try:
        return NETWORK_RPC_URLS[network]
    except KeyError:
        raise ValueError(
            f"unknown network {network!r}; expected one of {sorted(NETWORK_RPC_URLS)} "
            "or pass an explicit rpc_url"
        ) from None


@dataclass(slots=True)
class ClientConfig:
    # Network
    network: str = DEFAULT_NETWORK
    rpc_url: str = field(default_factory=lambda: NETWORK_RPC_URLS[DEFAULT_NETWORK])
    contract_id: str = DEFAULT_CONTRACT_ID
    # Protocol
    gas: int = DEFAULT_GAS
    stake_unit: int = 1
    hash_alg: str = "sha256"
    # HTTP behavior
    request_timeout: float = 10.0
    max_retries: int = 3
    backoff_factor: float = 0.25
    user_agent: str = field(default_factory=lambda: f"treasureboard-py/{__version__}")

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _ensure_scheme(self.rpc_url, ("http", "https"))
        if not self.contract_id:
            raise ValueError("contract_id must be non-empty")
        if int(self.gas) <= 0:
            raise ValueError("gas must be > 0")
        if int(self.stake_unit) <= 0:
            raise ValueError("stake_unit must be > 0")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        get_hasher(self.hash_alg)

    @classmethod
    def from_env(cls, prefix: str = "TREASURE_") -> "ClientConfig":
        """
        Create config from environment variables:

        TREASURE_NETWORK        (testnet | mainnet | localnet)
        TREASURE_RPC_URL        (http/https, overrides the network's endpoint)
        TREASURE_CONTRACT_ID    (contract account id)
        TREASURE_GAS            (int gas units per state-changing call)
        TREASURE_STAKE_UNIT     (int base units per stake unit, or "coin")
        TREASURE_HASH           (sha256 | sha3_256 | blake2b256)
        TREASURE_TIMEOUT        (float seconds, HTTP)
        TREASURE_MAX_RETRIES    (int, read-only calls only)
        TREASURE_BACKOFF        (float)
        TREASURE_USER_AGENT     (str)
        """
        network = _env(f"{prefix}NETWORK", DEFAULT_NETWORK) or DEFAULT_NETWORK
        rpc = _env(f"{prefix}RPC_URL") or _rpc_for_network(network)
        return cls(
            network=network,
            rpc_url=rpc,
            contract_id=_env(f"{prefix}CONTRACT_ID", DEFAULT_CONTRACT_ID) or DEFAULT_CONTRACT_ID,
            gas=int(_env(f"{prefix}GAS", str(DEFAULT_GAS))),
            stake_unit=_stake_unit(_env(f"{prefix}STAKE_UNIT", "1")),
            hash_alg=_env(f"{prefix}HASH", "sha256") or "sha256",
            request_timeout=float(_env(f"{prefix}TIMEOUT", "10.0")),
            max_retries=int(_env(f"{prefix}MAX_RETRIES", "3")),
            backoff_factor=float(_env(f"{prefix}BACKOFF", "0.25")),
            user_agent=_env(f"{prefix}USER_AGENT", f"treasureboard-py/{__version__}")
            or f"treasureboard-py/{__version__}",
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["ClientConfig"] = None, **overrides: Any
    ) -> "ClientConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys and None values are ignored. Switching `network` without
        an explicit `rpc_url` also switches the endpoint.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        given = {k: v for k, v in overrides.items() if k in data and v is not None}
        data.update(given)
        if "network" in given and "rpc_url" not in given:
            data["rpc_url"] = _rpc_for_network(data["network"])
        return cls(**data)

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "network": self.network,
            "rpc_url": self.rpc_url,
            "contract_id": self.contract_id,
            "gas": int(self.gas),
            "stake_unit": int(self.stake_unit),
            "hash_alg": self.hash_alg,
            "request_timeout": float(self.request_timeout),
            "max_retries": int(self.max_retries),
            "backoff_factor": float(self.backoff_factor),
            "user_agent": self.user_agent,
        }


__all__ = ["ClientConfig", "NETWORK_RPC_URLS", "DEFAULT_NETWORK"]
