"""
Pricing configuration parameters for DAP.

Operational settings read from the environment (or a .env file).
Protocol constants (BPS, MPS, curve width) live beside the code that
uses them and are not configurable.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv


@dataclass
class PricingConfig:
    """Pricing-wide configuration parameters"""

    # Environment
    chain_id: int = 1
    cosigner_private_key: Optional[str] = None  # Hex, used by `dap cosign`

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_to_file: bool = False


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(env_file: Optional[str] = None) -> PricingConfig:
    """
    Load configuration from the environment.

    Variables (all optional): DAP_CHAIN_ID, DAP_COSIGNER_KEY,
    DAP_LOG_LEVEL, DAP_LOG_DIR, DAP_LOG_TO_FILE. A .env file is read
    first; real environment variables win over it.

    Args:
        env_file: Optional path to a dotenv file (defaults to ./.env lookup)

    Returns:
        PricingConfig instance
    """
    if env_file:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    cfg = PricingConfig()

    chain_id = os.getenv("DAP_CHAIN_ID")
    if chain_id:
        cfg.chain_id = int(chain_id, 0)

    cfg.cosigner_private_key = os.getenv("DAP_COSIGNER_KEY") or None

    log_level = os.getenv("DAP_LOG_LEVEL")
    if log_level:
        cfg.log_level = log_level.upper()

    log_dir = os.getenv("DAP_LOG_DIR")
    if log_dir:
        cfg.log_dir = Path(log_dir)

    log_to_file = os.getenv("DAP_LOG_TO_FILE")
    if log_to_file:
        cfg.log_to_file = _env_flag(log_to_file)

    return cfg
