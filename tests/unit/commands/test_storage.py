"""Unit tests for storage location commands."""

import pytest

from cdn77_client.commands.billing import NO_PLAN_MESSAGE
from cdn77_client.commands.storage import get_storage_location, list_storage_locations
from cdn77_client.core.exceptions import DecodeError, ExpectedApiError, InvalidInputError


class TestListStorageLocations:
    """Tests for the storage list handler."""

    @pytest.mark.asyncio
    async def test_lists_locations_in_order(self, stub_api, api_client) -> None:
        stub_api.respond(
            200,
            json=[
                {"id": "push-1", "location": "Prague"},
                {"id": "push-2", "location": "London"},
            ],
        )

        result = await list_storage_locations(api_client)

        assert result.plain_text.splitlines() == [
            "Found 2 storage locations",
            "",
            "Location #0",
            "ID=push-1",
            "Location=Prague",
            "",
            "Location #1",
            "ID=push-2",
            "Location=London",
        ]
        assert stub_api.last_request.url.path == "/v3/storage-location"

    @pytest.mark.asyncio
    async def test_empty_list(self, stub_api, api_client) -> None:
        stub_api.respond(200, json=[])

        result = await list_storage_locations(api_client)

        assert result.plain_text.strip() == "Found 0 storage locations"

    @pytest.mark.asyncio
    async def test_no_plan_is_a_notice(self, stub_api, api_client) -> None:
        stub_api.respond(404)

        result = await list_storage_locations(api_client)

        assert result.plain_text.strip() == NO_PLAN_MESSAGE

    @pytest.mark.asyncio
    async def test_forbidden_uses_default_table(self, stub_api, api_client) -> None:
        stub_api.respond(403)

        with pytest.raises(ExpectedApiError, match="Got 403/forbidden"):
            await list_storage_locations(api_client)

    @pytest.mark.asyncio
    async def test_object_body_is_decode_error(self, stub_api, api_client) -> None:
        stub_api.respond(200, json={"id": "push-1", "location": "Prague"})

        with pytest.raises(DecodeError):
            await list_storage_locations(api_client)


class TestGetStorageLocation:
    """Tests for the storage detail handler."""

    @pytest.mark.asyncio
    async def test_shows_location(self, stub_api, api_client) -> None:
        stub_api.respond(200, json={"id": "push-1", "location": "Prague"})

        result = await get_storage_location(api_client, " push-1 ")

        assert result.plain_text.splitlines() == ["ID=push-1", "Location=Prague"]
        assert stub_api.last_request.url.path == "/v3/storage-location/push-1"

    @pytest.mark.asyncio
    async def test_empty_id_is_rejected_before_request(self, stub_api, api_client) -> None:
        with pytest.raises(InvalidInputError):
            await get_storage_location(api_client, "  ")

        assert stub_api.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("storage_id", ["a?b=1", "../cdn", "push#1"])
    async def test_id_cannot_change_endpoint(self, stub_api, api_client, storage_id) -> None:
        with pytest.raises(InvalidInputError, match="Please provide a valid storage location ID"):
            await get_storage_location(api_client, storage_id)

        assert stub_api.requests == []
