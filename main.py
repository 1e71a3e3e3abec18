# /main.py
# Command line entry point: run one BEX swap and print the transaction hash.
import argparse
import asyncio
import sys

from pydantic import ValidationError

from bexswap.core.config_validator import validate as validate_config
from bexswap.core.logger import configure_logging, get_logger
from bexswap.core.swap import SwapError
from bexswap.tool import bex_swap_handler

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Perform a token swap on BEX")
    parser.add_argument("--base", required=True, help="Base token address (the token sold)")
    parser.add_argument("--quote", required=True, help="Quote token address (the token bought)")
    parser.add_argument("--amount", required=True, help="Amount of base token to swap, e.g. 10 or 0.5")
    return parser.parse_args(argv)

async def main(argv=None) -> int:
    configure_logging()
    log = get_logger("BEXSWAP.System")
    args = parse_args(argv)
    validate_config()

    try:
        tx_hash = await bex_swap_handler({"base": args.base, "quote": args.quote, "amount": args.amount})
    except ValidationError as e:
        log.error("INVALID_SWAP_ARGUMENTS", error=str(e))
        return 2
    except SwapError as e:
        log.error("SWAP_ABORTED", error=str(e))
        return 1

    print(tx_hash)
    return 0

if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
