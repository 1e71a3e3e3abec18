"""ABI constants for the contracts the swap workflow talks to."""

from bexswap.abis.bex import BEX_MULTISWAP_ABI
from bexswap.abis.erc20 import ERC20_ABI

__all__ = ["BEX_MULTISWAP_ABI", "ERC20_ABI"]
