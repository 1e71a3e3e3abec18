# /bexswap/tool.py
# Function-calling tool definition for agents, plus its handler.
from typing import Any, Dict

from bexswap.adapters.dex import BexDexAdapter
from bexswap.adapters.route import RouteAdapter
from bexswap.core.chain import ChainClient
from bexswap.core.logger import get_logger
from bexswap.core.models import ADDRESS_PATTERN, SwapRequest
from bexswap.core.swap import execute_swap

log = get_logger(__name__)

BEX_SWAP_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "bex_swap",
        "description": "Perform a token swap on BEX",
        "parameters": {
            "type": "object",
            "properties": {
                "base": {
                    "type": "string",
                    "pattern": ADDRESS_PATTERN,
                    "description": "Base token address",
                },
                "quote": {
                    "type": "string",
                    "pattern": ADDRESS_PATTERN,
                    "description": "Quote token address",
                },
                "amount": {
                    "type": "number",
                    "description": "The amount of swap tokens",
                },
            },
            "required": ["base", "quote", "amount"],
        },
    },
}

async def bex_swap_handler(args: Dict[str, Any], chain=None, route_adapter: RouteAdapter | None = None) -> str:
    """
    Validates tool arguments and runs the swap workflow.

    Malformed arguments raise pydantic.ValidationError before anything touches
    the chain. Collaborators are built from settings unless passed in.
    """
    request = SwapRequest.model_validate(args)
    chain = chain or ChainClient()
    route = route_adapter or RouteAdapter()
    try:
        return await execute_swap(request, chain, route, dex=BexDexAdapter(chain))
    finally:
        if route_adapter is None:
            await route.close()
