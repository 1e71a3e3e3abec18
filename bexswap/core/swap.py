# /bexswap/core/swap.py
# The swap workflow: normalize -> reconcile allowance -> resolve route -> execute.
from bexswap.adapters.dex import BexDexAdapter
from bexswap.adapters.route import RouteAdapter
from bexswap.core.amounts import normalize_amount
from bexswap.core.logger import get_logger, bind_swap_id, clear_swap_id, SWAPS_EXECUTED, SWAPS_FAILED
from bexswap.core.models import SwapRequest

log = get_logger(__name__)

class SwapError(Exception):
    """The single error a caller sees when any stage of the workflow fails."""
    pass

async def execute_swap(request: SwapRequest, chain, route_adapter: RouteAdapter,
                       dex: BexDexAdapter | None = None, min_out: int | None = None) -> str:
    """
    Runs one swap end to end and returns the confirmed swap transaction hash.

    Stages run strictly in order and the first failure aborts the rest. A
    confirmed approval is left in place when a later stage fails.
    """
    dex = dex or BexDexAdapter(chain)
    swap_id = bind_swap_id()
    stage = "normalize"
    log.info("SWAP_WORKFLOW_STARTED", swap_id=swap_id, base=request.base, quote=request.quote, amount=str(request.amount))
    try:
        parsed_amount = await normalize_amount(chain, request.base, request.amount)

        stage = "allowance"
        await dex.ensure_allowance(request.base, parsed_amount)

        stage = "route"
        steps = await route_adapter.fetch_steps(request.base, request.quote, parsed_amount)

        stage = "swap"
        tx_hash = await dex.swap(steps, parsed_amount, min_out)
    except Exception as e:
        SWAPS_FAILED.labels(stage).inc()
        log.error("SWAP_FAILED", stage=stage, error=str(e))
        raise SwapError(f"Swap failed: {e}") from e
    else:
        SWAPS_EXECUTED.inc()
        log.info("SWAP_WORKFLOW_COMPLETED", tx_hash=tx_hash)
        return tx_hash
    finally:
        clear_swap_id()
