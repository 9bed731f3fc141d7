"""HTTP client for the venues API.

Responses are normalised through the same schemas the server uses, so rows
that still carry JSON-encoded sub-fields (``images``, ``coordinates``,
``pricing``) come back as structured objects.
"""

import logging

import httpx

from courtfinder.schemas import LoginResponse, SportOut, VenueAdminOut, VenueIn, VenueOut

logger = logging.getLogger(__name__)


class VenueClientError(Exception):
    def __init__(self, status_code: int, detail: object):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


def to_wire(venue: VenueIn | VenueOut) -> dict:
    """Request body for a venue: wire keys, unset fields and the id left out."""
    return venue.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude={"id"})


class VenueClient:
    def __init__(
        self,
        base_url: str,
        *,
        admin_secret: str | None = None,
        api_prefix: str = "/api",
        client: httpx.AsyncClient | None = None,
    ):
        headers = {"X-Admin-Secret": admin_secret} if admin_secret else {}
        self._client = client or httpx.AsyncClient(base_url=base_url)
        self._client.headers.update(headers)
        self._prefix = api_prefix
        self._admin = admin_secret is not None

    async def __aenter__(self) -> "VenueClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self._client.request(method, f"{self._prefix}{path}", **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail")
            except ValueError:
                detail = response.text
            raise VenueClientError(response.status_code, detail)
        return response

    def _venue(self, data: dict) -> VenueOut:
        schema = VenueAdminOut if self._admin else VenueOut
        return schema.model_validate(data)

    # --- Venues ---

    async def get_venues(self, **filters) -> list[VenueOut]:
        params = {k: v for k, v in filters.items() if v is not None}
        response = await self._request("GET", "/venues", params=params)
        return [self._venue(row) for row in response.json()]

    async def get_venue(self, venue_id: int) -> VenueOut:
        response = await self._request("GET", f"/venues/{venue_id}")
        return self._venue(response.json())

    async def upsert_venue(self, venue: VenueIn, venue_id: int | None = None) -> VenueOut:
        """Create when ``venue_id`` is None, otherwise update that venue."""
        if venue_id is None:
            response = await self._request("POST", "/venues", json=to_wire(venue))
        else:
            response = await self._request("PUT", f"/venues/{venue_id}", json=to_wire(venue))
        return self._venue(response.json())

    async def delete_venue(self, venue_id: int) -> None:
        await self._request("DELETE", f"/venues/{venue_id}")

    async def update_venue_order(self, ordered_ids: list[int], sport_id: int | None = None) -> None:
        body: dict = {"orderedIds": ordered_ids}
        if sport_id is not None:
            body["sportId"] = sport_id
        await self._request("PATCH", "/venues/order", json=body)

    # --- Sports ---

    async def get_sports(self) -> list[SportOut]:
        response = await self._request("GET", "/sports")
        return [SportOut.model_validate(row) for row in response.json()]

    # --- Admin ---

    async def login(self, password: str) -> LoginResponse:
        response = await self._request("POST", "/auth/login", json={"password": password})
        return LoginResponse.model_validate(response.json())
