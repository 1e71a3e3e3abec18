# /bexswap/core/chain.py
# Async web3 client: contract reads, signed contract writes and receipt waits.
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from bexswap.core.config import settings
from bexswap.core.logger import get_logger
from bexswap.core.models import TransactionReceipt

log = get_logger(__name__)

class ChainClientConfigError(Exception):
    pass

class ChainClient:
    """
    Thin wrapper around AsyncWeb3 bound to one signing account.

    Gas limit and fee fields are left to the node's defaults. The nonce is read
    from the pending transaction count on every write, so concurrent workflows
    sharing an account can race at the chain layer.
    """
    def __init__(self, rpc_url: str | None = None, private_key: str | None = None):
        key = private_key or (settings.EXECUTOR_PRIVATE_KEY.get_secret_value() if settings.EXECUTOR_PRIVATE_KEY else None)
        if not key:
            raise ChainClientConfigError("EXECUTOR_PRIVATE_KEY is not configured.")
        self.rpc_url = rpc_url or settings.RPC_URL
        self.w3 = AsyncWeb3(AsyncHTTPProvider(self.rpc_url))
        self.account = self.w3.eth.account.from_key(key)
        self.address = self.account.address
        log.info("CHAIN_CLIENT_INITIALIZED", rpc_url=self.rpc_url, address=self.address)

    def _contract(self, address: str, abi: list):
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    async def read_contract(self, address: str, abi: list, function_name: str, *args) -> Any:
        contract = self._contract(address, abi)
        try:
            return await getattr(contract.functions, function_name)(*args).call()
        except Exception as e:
            log.error("CONTRACT_READ_FAILED", address=address, function=function_name, error=str(e))
            raise

    async def write_contract(self, address: str, abi: list, function_name: str, *args, value: int | None = None) -> str:
        """Builds, signs and broadcasts a contract call. Returns the 0x-prefixed tx hash."""
        contract = self._contract(address, abi)
        nonce = await self.w3.eth.get_transaction_count(self.address, "pending")
        tx_params = {
            'from': self.address,
            'nonce': nonce,
            'chainId': settings.chain_id,
        }
        if value:
            tx_params['value'] = value

        try:
            tx = await getattr(contract.functions, function_name)(*args).build_transaction(tx_params)
            signed_tx = self.account.sign_transaction(tx)
            tx_hash = Web3.to_hex(await self.w3.eth.send_raw_transaction(signed_tx.raw_transaction))
        except Exception as e:
            log.error("TRANSACTION_SEND_FAILED", address=address, function=function_name, nonce=nonce, error=str(e), exc_info=True)
            raise

        log.info("TRANSACTION_BROADCASTED", tx_hash=tx_hash, function=function_name, nonce=nonce, value=value or 0)
        return tx_hash

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Blocks until the transaction is mined, using web3's default timeout."""
        raw = await self.w3.eth.wait_for_transaction_receipt(tx_hash)
        receipt = TransactionReceipt(hash=tx_hash, status="success" if raw["status"] == 1 else "reverted")
        log.info("TRANSACTION_MINED", tx_hash=tx_hash, status=receipt.status, block=raw.get("blockNumber"))
        return receipt
