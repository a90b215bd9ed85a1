"""
Client configuration.

Known networks and the settings the REST client uses to reach a fullnode and
to fill in transaction defaults.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional, Any

from pydantic import BaseModel, Field, field_validator

from .tx.raw_transaction import DEFAULT_EXPIRATION_TTL, DEFAULT_GAS_UNIT_PRICE, DEFAULT_MAX_GAS_AMOUNT


class Network(Enum):
    """Public Aptos networks plus a local node."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"
    LOCALNET = "localnet"

    @property
    def fullnode_url(self) -> str:
        if self is Network.LOCALNET:
            return "http://127.0.0.1:8080"
        return f"https://fullnode.{self.value}.aptoslabs.com"

    @property
    def faucet_url(self) -> Optional[str]:
        if self is Network.MAINNET:
            return None
        if self is Network.LOCALNET:
            return "http://127.0.0.1:8081"
        return f"https://faucet.{self.value}.aptoslabs.com"

    @property
    def chain_id(self) -> Optional[int]:
        """Fixed chain id, or None for devnet which is reset periodically."""
        return {
            Network.MAINNET: 1,
            Network.TESTNET: 2,
            Network.LOCALNET: 4,
        }.get(self)


class ClientConfig(BaseModel):
    """
    Settings for the REST client.

    Gas and expiration values are used when the client builds a transaction
    itself.
    """
    fullnode_url: str = Field(description="Fullnode base URL, without the /v1 suffix")
    faucet_url: Optional[str] = Field(default=None, description="Faucet base URL")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    max_gas_amount: int = Field(default=DEFAULT_MAX_GAS_AMOUNT, ge=0)
    gas_unit_price: int = Field(default=DEFAULT_GAS_UNIT_PRICE, ge=0)
    expiration_ttl: int = Field(default=DEFAULT_EXPIRATION_TTL, gt=0, description="Seconds until expiry")
    log_level: Optional[str] = Field(default=None, description="Level applied to the aptos_client logger")

    @field_validator('fullnode_url', 'faucet_url', mode='before')
    @classmethod
    def normalize_url(cls, v: Any) -> Optional[str]:
        """Strip whitespace and trailing slashes."""
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError(f"URL must be a string, got {type(v)}")
        v = v.strip().rstrip('/')
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http:// or https://, got {v!r}")
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        level = str(v).upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown log level {v!r}")
        return level

    @classmethod
    def for_network(cls, network: Network, **kwargs) -> ClientConfig:
        """
        Build the configuration for a known network.

        Args:
            network: Target network
            **kwargs: Overrides for any other field
        """
        return cls(fullnode_url=network.fullnode_url, faucet_url=network.faucet_url, **kwargs)

    @property
    def api_url(self) -> str:
        return f"{self.fullnode_url}/v1"
