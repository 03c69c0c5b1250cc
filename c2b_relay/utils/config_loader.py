"""
Relay configuration loader (M-Pesa endpoint, server, integrations mode).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "relay_config.yml"


class MpesaConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = "https://sandbox.safaricom.co.ke/mpesa/c2b/v1/simulate"
    short_code: int = 600982
    command_id: str = "CustomerBuyGoodsOnline"
    bill_ref_number: str = ""  # paybill short codes only
    bearer_token_env: str = "MPESA_BEARER_TOKEN"
    timeout_seconds: Optional[float] = Field(default=30.0, gt=0)


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = Field(default=8000, ge=1, le=65535)


class RelayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    mpesa: MpesaConfig = Field(default_factory=MpesaConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    integrations_mode: Literal["auto", "real", "mock"] = "auto"

    @property
    def bearer_token(self) -> str:
        return os.getenv(self.mpesa.bearer_token_env, "").strip()

    def use_real_integrations(self) -> bool:
        if self.integrations_mode == "real":
            return True
        if self.integrations_mode == "mock":
            return False
        return bool(self.bearer_token)


def load_relay_config(config_path: Optional[Path] = None) -> RelayConfig:
    """
    Load and validate the relay configuration.

    Args:
        config_path: Path to a YAML config file. Defaults to $C2B_RELAY_CONFIG,
            then config/relay_config.yml. A missing default file yields the
            built-in defaults.

    Raises:
        FileNotFoundError: If an explicitly requested config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    explicit = config_path is not None or bool(os.getenv("C2B_RELAY_CONFIG"))
    if config_path is None:
        config_path = Path(os.getenv("C2B_RELAY_CONFIG") or DEFAULT_CONFIG_PATH)

    data = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    elif explicit:
        raise FileNotFoundError(f"Relay config file not found: {config_path}")
    else:
        logger.warning("Relay config %s not found, using defaults", config_path)

    mode = os.getenv("INTEGRATIONS_MODE", "").strip().lower()
    if mode:
        data["integrations_mode"] = mode

    try:
        cfg = RelayConfig(**data)
        logger.info("Successfully loaded relay config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Relay config validation failed: %s", e)
        raise
