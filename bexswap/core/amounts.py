# /bexswap/core/amounts.py
from decimal import Decimal, ROUND_HALF_UP

from bexswap.abis import ERC20_ABI
from bexswap.core.logger import get_logger

log = get_logger(__name__)

def to_base_units(amount: Decimal | int | str, decimals: int) -> int:
    """
    Scales a human-readable amount to the token's smallest unit.

    Digits past `decimals` are rounded half-up, e.g. 1.0000005 with 6 decimals
    gives 1000001.
    """
    value = Decimal(str(amount))
    if not value.is_finite():
        raise ValueError(f"Amount is not a finite number: {amount}")
    if value < 0:
        raise ValueError(f"Amount must not be negative: {amount}")
    if decimals < 0:
        raise ValueError(f"Invalid token decimals: {decimals}")
    return int(value.scaleb(decimals).quantize(Decimal(1), rounding=ROUND_HALF_UP))

def from_base_units(value: int, decimals: int) -> Decimal:
    return Decimal(value).scaleb(-decimals)

async def normalize_amount(chain, token: str, amount: Decimal) -> int:
    """Reads `decimals()` from the token (never cached) and converts `amount`."""
    log.info("FETCHING_TOKEN_DECIMALS", token=token)
    decimals = await chain.read_contract(token, ERC20_ABI, "decimals")
    log.info("TOKEN_DECIMALS_FETCHED", token=token, decimals=decimals)

    parsed_amount = to_base_units(amount, decimals)
    log.info("AMOUNT_NORMALIZED", token=token, amount=str(amount), parsed_amount=parsed_amount)
    return parsed_amount
