# Shared dummies for tests that talk to the route service.

class DummyResponse:
    def __init__(self, status: int, payload):
        self.status = status
        self.payload = payload

    async def json(self, content_type=None):
        return self.payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

class DummySession:
    """Stands in for aiohttp.ClientSession; records every GET."""
    def __init__(self, status: int = 200, payload=None):
        self.status = status
        self.payload = payload
        self.requests = []
        self.closed = False

    def get(self, url, params=None):
        self.requests.append({"url": url, "params": params})
        return DummyResponse(self.status, self.payload)

    async def close(self):
        self.closed = True
