"""VenueClient against the in-process app."""

import pytest
from httpx import ASGITransport, AsyncClient

from courtfinder.client import VenueClient, VenueClientError, to_wire
from courtfinder.schemas import TextPricing, VenueAdminOut, VenueIn


def venue_client(app, admin_secret=None) -> VenueClient:
    transport_client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    return VenueClient("http://test", admin_secret=admin_secret, client=transport_client)


def test_to_wire_uses_wire_keys_and_sent_fields_only():
    venue = VenueIn(mtr_station="Mong Kok", starting_price=90)
    assert to_wire(venue) == {"mtrStation": "Mong Kok", "startingPrice": 90}


@pytest.mark.asyncio
async def test_upsert_get_and_delete(app):
    async with venue_client(app) as api:
        created = await api.upsert_venue(VenueIn(name="Court A", pricing=TextPricing(type="text", content="$100/hr")))
        assert created.id is not None
        assert created.pricing.content == "$100/hr"

        updated = await api.upsert_venue(VenueIn(mtr_station="Prince Edward"), venue_id=created.id)
        assert updated.name == "Court A"
        assert updated.mtr_station == "Prince Edward"

        fetched = await api.get_venue(created.id)
        assert fetched == updated

        await api.delete_venue(created.id)
        with pytest.raises(VenueClientError) as excinfo:
            await api.get_venue(created.id)
        assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_order_filters_and_login(app):
    async with venue_client(app) as api:
        a = await api.upsert_venue(VenueIn(name="A", mtr_station="Mong Kok", admin_password="pw"))
        b = await api.upsert_venue(VenueIn(name="B", mtr_station="Kwun Tong", admin_password="pw"))

        await api.update_venue_order([b.id, a.id])
        assert [v.id for v in await api.get_venues()] == [b.id, a.id]
        assert [v.id for v in await api.get_venues(station="kwun", q=None)] == [b.id]

        login = await api.login("pw")
        assert login.allowed_venue_ids == [a.id, b.id]
        assert login.is_super_admin is False

        with pytest.raises(VenueClientError) as excinfo:
            await api.login("wrong")
        assert excinfo.value.status_code == 401

        assert await api.get_sports() == []


@pytest.mark.asyncio
async def test_admin_client_sees_password_hash(app, super_admin_secret):
    async with venue_client(app) as public_api:
        venue = await public_api.upsert_venue(VenueIn(name="A", admin_password="pw"))

    async with venue_client(app, admin_secret=super_admin_secret) as admin_api:
        seen = await admin_api.get_venue(venue.id)
        assert isinstance(seen, VenueAdminOut)
        assert seen.admin_password.startswith("$2")
