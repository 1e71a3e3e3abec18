# End-to-end runs of the swap workflow over the mock chain and a dummy route service.

import asyncio
from decimal import Decimal
import pytest
from web3 import Web3

from bexswap.adapters.dex import BexDexAdapter, ApprovalFailedError
from bexswap.adapters.mock import MockChainClient
from bexswap.adapters.route import RouteAdapter, RouteFetchError
from bexswap.core.logger import SWAPS_EXECUTED, SWAPS_FAILED
from bexswap.core.models import SwapRequest
from bexswap.core.swap import execute_swap, SwapError
from helpers import DummySession

USDC_ADDR = Web3.to_checksum_address("0xd6D83aF58a19Cd14eF3CF6fe848C9A4d21e5727c")
WBERA_ADDR = Web3.to_checksum_address("0x7507c1dc16935B82698e4C63f2746A2fCf994dF8")
ROUTER_ADDR = Web3.to_checksum_address("0x21e2C0AFd058A89FCf7caf3aEA3cB84Ae977B73D")
ROUTE_URL = "https://route.test/dex/route"

USDC_TO_WBERA = {"steps": [{"poolIdx": 36000, "base": USDC_ADDR, "quote": WBERA_ADDR, "isBuy": True}]}

@pytest.fixture
def mock_env():
    """USDC with 18 decimals, no allowance, and a one-hop USDC -> WBERA route."""
    chain = MockChainClient()
    chain.set_decimals(USDC_ADDR, 18)
    session = DummySession(payload=USDC_TO_WBERA)
    route = RouteAdapter(session=session, api_url=ROUTE_URL)
    dex = BexDexAdapter(chain, router_address=ROUTER_ADDR, wrapped_native_address=WBERA_ADDR, approval_strategy="exact")
    request = SwapRequest(base=USDC_ADDR, quote=WBERA_ADDR, amount=10)
    return chain, session, route, dex, request

@pytest.mark.asyncio
async def test_usdc_to_wbera_with_zero_allowance(mock_env):
    """
    GIVEN no allowance on USDC and a route with a single USDC -> WBERA hop
    WHEN the workflow runs for 10 USDC
    THEN it approves exactly 10e18, fetches the route, swaps without value and returns the swap hash.
    """
    chain, session, route, dex, request = mock_env
    executed_before = SWAPS_EXECUTED._value.get()

    tx_hash = await execute_swap(request, chain, route, dex=dex)

    approve, swap = chain.sent_transactions
    assert approve["function"] == "approve"
    assert approve["args"] == (ROUTER_ADDR, 10 * 10**18)
    assert session.requests[0]["params"]["amount"] == str(10 * 10**18)
    assert swap["function"] == "multiSwap"
    assert swap["args"] == ([(36000, USDC_ADDR, WBERA_ADDR, True)], 10 * 10**18, 0)
    assert not swap["value"]
    assert tx_hash == swap["hash"]
    assert SWAPS_EXECUTED._value.get() == executed_before + 1

@pytest.mark.asyncio
async def test_existing_allowance_skips_approval(mock_env):
    chain, _, route, dex, request = mock_env
    chain.set_allowance(USDC_ADDR, ROUTER_ADDR, 10 * 10**18)

    await execute_swap(request, chain, route, dex=dex)

    assert chain.calls("approve") == []
    assert len(chain.calls("multiSwap")) == 1

@pytest.mark.asyncio
async def test_failed_approval_stops_before_route_and_swap(mock_env):
    chain, session, route, dex, request = mock_env
    chain.queue_receipt_status("reverted")

    with pytest.raises(SwapError, match="Swap failed: Approval transaction failed") as exc:
        await execute_swap(request, chain, route, dex=dex)

    assert isinstance(exc.value.__cause__, ApprovalFailedError)
    assert session.requests == []
    assert chain.calls("multiSwap") == []

@pytest.mark.asyncio
async def test_route_http_500_aborts_without_swap(mock_env):
    chain, _, _, dex, request = mock_env
    route = RouteAdapter(session=DummySession(status=500), api_url=ROUTE_URL)
    failed_before = SWAPS_FAILED.labels("route")._value.get()

    with pytest.raises(SwapError, match="Failed to fetch swap steps") as exc:
        await execute_swap(request, chain, route, dex=dex)

    assert isinstance(exc.value.__cause__, RouteFetchError)
    assert chain.calls("multiSwap") == []
    assert SWAPS_FAILED.labels("route")._value.get() == failed_before + 1

@pytest.mark.asyncio
async def test_empty_route_aborts_without_swap(mock_env):
    chain, _, _, dex, request = mock_env
    route = RouteAdapter(session=DummySession(payload={"steps": []}), api_url=ROUTE_URL)

    with pytest.raises(SwapError, match="No valid swap steps returned"):
        await execute_swap(request, chain, route, dex=dex)

    assert chain.calls("multiSwap") == []

@pytest.mark.asyncio
async def test_decimals_failure_aborts_before_any_transaction(mock_env):
    chain, session, route, dex, request = mock_env
    chain.fail_reads_of("decimals")

    with pytest.raises(SwapError, match="Swap failed: Mock read of decimals failed"):
        await execute_swap(request, chain, route, dex=dex)

    assert chain.sent_transactions == []
    assert session.requests == []

@pytest.mark.asyncio
async def test_reverted_swap_keeps_confirmed_approval(mock_env):
    chain, _, route, dex, request = mock_env
    chain.queue_receipt_status("success", "reverted")

    with pytest.raises(SwapError, match="Swap transaction failed with status: reverted"):
        await execute_swap(request, chain, route, dex=dex)

    assert len(chain.calls("approve")) == 1
    assert chain.allowances[USDC_ADDR.lower()][ROUTER_ADDR.lower()] == 10 * 10**18

@pytest.mark.asyncio
async def test_native_base_hop_attaches_amount_as_value():
    chain = MockChainClient()
    chain.set_decimals(WBERA_ADDR, 18)
    route = RouteAdapter(
        session=DummySession(payload={"steps": [{"poolIdx": 36000, "base": WBERA_ADDR, "quote": USDC_ADDR, "isBuy": False}]}),
        api_url=ROUTE_URL,
    )
    dex = BexDexAdapter(chain, router_address=ROUTER_ADDR, wrapped_native_address=WBERA_ADDR)
    request = SwapRequest(base=WBERA_ADDR, quote=USDC_ADDR, amount=Decimal("0.5"))

    await execute_swap(request, chain, route, dex=dex)

    assert chain.calls("multiSwap")[0]["value"] == 5 * 10**17

@pytest.mark.asyncio
async def test_concurrent_swaps_do_not_interfere():
    async def run(amount):
        chain = MockChainClient()
        chain.set_decimals(USDC_ADDR, 6)
        route = RouteAdapter(session=DummySession(payload=USDC_TO_WBERA), api_url=ROUTE_URL)
        dex = BexDexAdapter(chain, router_address=ROUTER_ADDR, wrapped_native_address=WBERA_ADDR)
        await execute_swap(SwapRequest(base=USDC_ADDR, quote=WBERA_ADDR, amount=amount), chain, route, dex=dex)
        return chain

    first, second = await asyncio.gather(run(1), run(2))

    assert first.calls("multiSwap")[0]["args"][1] == 1_000_000
    assert second.calls("multiSwap")[0]["args"][1] == 2_000_000
