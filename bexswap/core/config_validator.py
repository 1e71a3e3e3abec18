# /bexswap/core/config_validator.py
# Run at startup to validate the settings needed to sign and send swaps.
import re

from bexswap.core.config import settings
from bexswap.core.logger import log
from bexswap.core.models import ADDRESS_PATTERN

def validate():
    log.info("--- CONFIG VALIDATION START ---")
    required_vars = ['EXECUTOR_PRIVATE_KEY', 'RPC_URL', 'BEX_ROUTER_ADDRESS', 'WBERA_ADDRESS', 'ROUTE_API_URL']
    errors = []

    for var in required_vars:
        if not getattr(settings, var, None):
            errors.append(f"Missing required configuration: {var}")

    for var in ('BEX_ROUTER_ADDRESS', 'WBERA_ADDRESS'):
        value = getattr(settings, var, None)
        if value and not re.fullmatch(ADDRESS_PATTERN, value):
            errors.append(f"Invalid address for {var}: {value}")

    if settings.SWAP_MIN_OUT < 0:
        errors.append("SWAP_MIN_OUT must not be negative")

    if errors:
        for error in errors:
            log.critical(error)
        raise ValueError("System configuration is incomplete. Halting.")

    if settings.SWAP_MIN_OUT == 0:
        log.warning("SWAP_MIN_OUT_IS_ZERO", detail="Swaps are submitted without slippage protection.")

    log.info("--- CONFIG VALIDATION PASSED ---")

if __name__ == "__main__":
    validate()
