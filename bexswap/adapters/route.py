# /bexswap/adapters/route.py
# Client for the BEX route-quoting service.
from typing import List
import aiohttp
from pydantic import ValidationError

from bexswap.core.config import settings
from bexswap.core.logger import get_logger
from bexswap.core.models import RouteStep

log = get_logger(__name__)

class RouteFetchError(Exception):
    """Raised when the route service answers with a bad status or no body."""
    pass

class NoRouteError(Exception):
    """Raised when the route service returns no usable steps."""
    pass

class RouteAdapter:
    """
    Asks the route service which pools to hop through for a base -> quote swap.
    One GET per call; nothing is retried or cached.
    """
    def __init__(self, session: aiohttp.ClientSession | None = None, api_url: str | None = None):
        self.api_url = api_url or settings.ROUTE_API_URL
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def fetch_steps(self, base: str, quote: str, amount: int) -> List[RouteStep]:
        params = {"fromAsset": base, "toAsset": quote, "amount": str(amount)}
        log.info("REQUESTING_ROUTE", url=self.api_url, params=params)

        async with self.session.get(self.api_url, params=params) as response:
            if response.status != 200:
                log.error("ROUTE_REQUEST_FAILED", status=response.status)
                raise RouteFetchError("Failed to fetch swap steps from API")
            data = await response.json(content_type=None)

        if not data:
            log.error("ROUTE_RESPONSE_EMPTY")
            raise RouteFetchError("Failed to fetch swap steps from API")

        raw_steps = data.get("steps") if isinstance(data, dict) else None
        if not raw_steps:
            raise NoRouteError("No valid swap steps returned from the API")

        try:
            steps = [
                RouteStep(poolIdx=s["poolIdx"], base=s["base"], quote=s["quote"], isBuy=s["isBuy"])
                for s in raw_steps
            ]
        except (KeyError, TypeError, ValidationError) as e:
            log.error("ROUTE_STEP_MALFORMED", error=str(e))
            raise NoRouteError("No valid swap steps returned from the API") from e

        log.info("SWAP_STEPS_FETCHED", steps=[s.model_dump(by_alias=True) for s in steps])
        return steps

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
