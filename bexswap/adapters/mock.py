# /bexswap/adapters/mock.py
# In-memory stand-ins for the chain client, used by tests and dry runs.

from typing import Any, Dict, List

from bexswap.core.logger import get_logger
from bexswap.core.models import TransactionReceipt

log = get_logger(__name__)

class MockChainClient:
    """
    A mock implementation of ChainClient for testing purposes.
    It answers ERC20 reads from local tables, records every write, and
    returns receipts with a configurable status.
    """
    def __init__(self, address: str = "0x000000000000000000000000000000000000dEaD"):
        self.address = address
        self.decimals: Dict[str, int] = {}
        # token -> spender -> amount
        self.allowances: Dict[str, Dict[str, int]] = {}
        self.reads: List[Dict[str, Any]] = []
        self.sent_transactions: List[Dict[str, Any]] = []
        self._receipt_status: Dict[str, str] = {}
        self._fail_reads: set[str] = set()
        self._next_status: List[str] = []
        self.nonce = 0
        log.info("MOCK_CHAIN_CLIENT_INITIALIZED", address=self.address)

    def set_decimals(self, token: str, decimals: int):
        self.decimals[token.lower()] = decimals

    def set_allowance(self, token: str, spender: str, amount: int):
        self.allowances.setdefault(token.lower(), {})[spender.lower()] = amount

    def fail_reads_of(self, function_name: str):
        """Make every later read of `function_name` raise."""
        self._fail_reads.add(function_name)

    def queue_receipt_status(self, *statuses: str):
        """Statuses handed to the next transactions in send order; default is success."""
        self._next_status.extend(statuses)

    def calls(self, function_name: str) -> List[Dict[str, Any]]:
        return [tx for tx in self.sent_transactions if tx["function"] == function_name]

    async def read_contract(self, address: str, abi: list, function_name: str, *args) -> Any:
        self.reads.append({"address": address, "function": function_name, "args": args})
        if function_name in self._fail_reads:
            raise ConnectionError(f"Mock read of {function_name} failed")
        if function_name == "decimals":
            if address.lower() not in self.decimals:
                raise ValueError(f"No mock decimals set for {address}")
            return self.decimals[address.lower()]
        if function_name == "allowance":
            _owner, spender = args
            return self.allowances.get(address.lower(), {}).get(spender.lower(), 0)
        raise ValueError(f"Unsupported mock read: {function_name}")

    async def write_contract(self, address: str, abi: list, function_name: str, *args, value: int | None = None) -> str:
        tx_hash = "0x" + f"{self.nonce + 1:064x}"
        tx = {"hash": tx_hash, "to": address, "function": function_name, "args": args, "value": value}
        self.sent_transactions.append(tx)
        self._receipt_status[tx_hash] = self._next_status.pop(0) if self._next_status else "success"
        self.nonce += 1

        if function_name == "approve" and self._receipt_status[tx_hash] == "success":
            spender, amount = args
            self.set_allowance(address, spender, amount)

        log.info("MOCK_TRANSACTION_SENT", tx=tx)
        return tx_hash

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        return TransactionReceipt(hash=tx_hash, status=self._receipt_status[tx_hash])
