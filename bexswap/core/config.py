# /bexswap/core/config.py
from typing import Literal
from pydantic_settings import BaseSettings
from pydantic import SecretStr

class Settings(BaseSettings):
    # Signing account
    EXECUTOR_PRIVATE_KEY: SecretStr | None = None

    # Chain
    RPC_URL: str = "https://bartio.rpc.berachain.com"
    chain_id: int = 80084

    # BEX contracts (bArtio)
    BEX_ROUTER_ADDRESS: str = "0x21e2C0AFd058A89FCf7caf3aEA3cB84Ae977B73D"
    WBERA_ADDRESS: str = "0x7507c1dc16935B82698e4C63f2746A2fCf994dF8"

    # Route quoting service
    ROUTE_API_URL: str = "https://bartio-bex-router.berachain.com/dex/route"

    # Swap behaviour
    # "exact" re-approves the router for each swap amount; "max" approves once for 2**256 - 1.
    APPROVAL_STRATEGY: Literal["exact", "max"] = "exact"
    # Zero means the swap accepts any output amount (no slippage protection).
    SWAP_MIN_OUT: int = 0

    # Operational Settings
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: SecretStr | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

try:
    settings = Settings()
except Exception as e:
    # Late import: the logger module reads settings at import time
    try:
        from bexswap.core.logger import get_logger, configure_logging
        configure_logging()
        log = get_logger("BEXSWAP.Config")
        log.critical("FAILED_TO_LOAD_SETTINGS", error=str(e))
    except Exception:
        print("FAILED_TO_LOAD_SETTINGS", e)
    raise SystemExit(1)
