# /bexswap/adapters/dex.py
from typing import List
from web3 import Web3

from bexswap.abis import BEX_MULTISWAP_ABI, ERC20_ABI
from bexswap.core.config import settings
from bexswap.core.logger import get_logger, APPROVALS_SUBMITTED
from bexswap.core.models import AllowanceState, RouteStep

log = get_logger(__name__)

MAX_UINT256 = 2**256 - 1

class ApprovalFailedError(Exception):
    pass

class SwapTransactionError(Exception):
    pass

class BexDexAdapter:
    """
    Allowance management and multiSwap submission against the BEX router.

    `chain` is anything with the ChainClient interface (read_contract,
    write_contract, wait_for_receipt and an `address` attribute).
    """
    def __init__(self, chain, router_address: str | None = None, wrapped_native_address: str | None = None,
                 approval_strategy: str | None = None):
        self.chain = chain
        self.router_address = Web3.to_checksum_address(router_address or settings.BEX_ROUTER_ADDRESS)
        self.wrapped_native_address = Web3.to_checksum_address(wrapped_native_address or settings.WBERA_ADDRESS)
        self.approval_strategy = approval_strategy or settings.APPROVAL_STRATEGY
        if self.approval_strategy not in ("exact", "max"):
            raise ValueError(f"Unknown approval strategy: {self.approval_strategy}")

    async def get_allowance_state(self, token: str, required: int) -> AllowanceState:
        log.info("CHECKING_ALLOWANCE", token=token, spender=self.router_address)
        current = await self.chain.read_contract(token, ERC20_ABI, "allowance", self.chain.address, self.router_address)
        log.info("CURRENT_ALLOWANCE", token=token, allowance=current)
        return AllowanceState(current=current, required=required)

    async def ensure_allowance(self, token: str, amount: int) -> str | None:
        """
        Approves the router for `amount` of `token` if the current allowance is short.
        Returns the confirmed approval hash, or None when no approval was needed.
        """
        state = await self.get_allowance_state(token, amount)
        if state.is_sufficient:
            log.info("SUFFICIENT_ALLOWANCE_AVAILABLE", token=token, allowance=state.current, required=state.required)
            return None

        approve_amount = MAX_UINT256 if self.approval_strategy == "max" else amount
        log.info("ALLOWANCE_INSUFFICIENT_APPROVING", token=token, spender=self.router_address, amount=approve_amount)
        tx_hash = await self.chain.write_contract(token, ERC20_ABI, "approve", self.router_address, approve_amount)
        APPROVALS_SUBMITTED.inc()

        receipt = await self.chain.wait_for_receipt(tx_hash)
        if not receipt.succeeded:
            log.error("APPROVAL_TRANSACTION_FAILED", tx_hash=tx_hash, status=receipt.status)
            raise ApprovalFailedError("Approval transaction failed")

        log.info("APPROVAL_SUCCESSFUL", tx_hash=tx_hash)
        return tx_hash

    def requires_native_value(self, steps: List[RouteStep]) -> bool:
        """True when a hop spends the wrapped native token, which the router takes as msg.value."""
        return any(Web3.to_checksum_address(step.base) == self.wrapped_native_address for step in steps)

    async def swap(self, steps: List[RouteStep], amount: int, min_out: int | None = None) -> str:
        if not steps:
            raise ValueError("Cannot swap without route steps.")
        min_out = settings.SWAP_MIN_OUT if min_out is None else min_out
        if min_out == 0:
            log.warning("SWAP_WITHOUT_SLIPPAGE_PROTECTION", min_out=min_out)

        value = amount if self.requires_native_value(steps) else None
        call_steps = [
            (s.pool_idx, Web3.to_checksum_address(s.base), Web3.to_checksum_address(s.quote), s.is_buy)
            for s in steps
        ]
        tx_hash = await self.chain.write_contract(
            self.router_address, BEX_MULTISWAP_ABI, "multiSwap", call_steps, amount, min_out, value=value
        )

        receipt = await self.chain.wait_for_receipt(tx_hash)
        if not receipt.succeeded:
            log.error("SWAP_TRANSACTION_FAILED", tx_hash=tx_hash, status=receipt.status)
            raise SwapTransactionError(f"Swap transaction failed with status: {receipt.status}")

        log.info("SWAP_SUCCESSFUL", tx_hash=tx_hash)
        return tx_hash
