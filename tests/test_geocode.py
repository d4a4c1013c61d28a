import httpx
import pytest
from unittest.mock import AsyncMock, patch
from fastapi import status

from app.core.errors import GeocodingError, NotFoundError, ValidationError
from app.core.result import Err, Ok
from app.services import nominatim
from app.services.nominatim import ADDRESS_NOT_FOUND, lookup_address

MATCH = {
    "lat": "40.7127281",
    "lon": "-74.0060152",
    "display_name": "City of New York, New York, United States",
    "addresstype": "city",
    "class": "boundary",
    "place_rank": 16,
}

def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))

@pytest.mark.asyncio
async def test_lookup_returns_first_match():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[MATCH, {**MATCH, "display_name": "other"}])

    async with mock_client(handler) as client:
        result = await lookup_address(client, "New York")

    assert result == Ok(MATCH)
    assert len(requests) == 1
    params = requests[0].url.params
    assert params["q"] == "New York"
    assert params["format"] == "json"
    assert params["addressdetails"] == "1"
    assert params["limit"] == "5"
    assert "accept-language" not in params

@pytest.mark.asyncio
async def test_lookup_retries_once_with_fallback_language():
    requests = []

    def handler(request):
        requests.append(request)
        if "accept-language" in request.url.params:
            return httpx.Response(200, json=[MATCH])
        return httpx.Response(200, json=[])

    async with mock_client(handler) as client:
        result = await lookup_address(client, "Nueva York")

    assert result == Ok(MATCH)
    assert len(requests) == 2
    assert requests[1].url.params["accept-language"] == "en"

@pytest.mark.asyncio
async def test_lookup_not_found_after_fallback():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    async with mock_client(handler) as client:
        result = await lookup_address(client, "nowhere at all")

    assert isinstance(result, Err)
    assert isinstance(result.error, NotFoundError)
    assert result.error.message == ADDRESS_NOT_FOUND
    assert len(calls) == 2

@pytest.mark.asyncio
async def test_lookup_upstream_error():
    async with mock_client(lambda request: httpx.Response(503, text="overloaded")) as client:
        result = await lookup_address(client, "New York")

    assert isinstance(result, Err)
    assert isinstance(result.error, GeocodingError)
    assert "503" in result.error.detail

@pytest.mark.asyncio
async def test_lookup_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_client(handler) as client:
        result = await lookup_address(client, "New York")

    assert isinstance(result, Err)
    assert isinstance(result.error, GeocodingError)

@pytest.mark.asyncio
async def test_geocode_blank_address_skips_lookup():
    result = await nominatim.geocode("   ")
    assert isinstance(result, Err)
    assert isinstance(result.error, ValidationError)

@pytest.mark.asyncio
@patch("app.services.nominatim.geocode", new_callable=AsyncMock)
async def test_geocode_endpoint_success(mock_geocode, client):
    mock_geocode.return_value = Ok(MATCH)
    response = await client.get("/api/geocode", params={"q": "New York"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "result": MATCH}
    mock_geocode.assert_called_once_with("New York")

@pytest.mark.asyncio
@patch("app.services.nominatim.geocode", new_callable=AsyncMock)
async def test_geocode_endpoint_not_found(mock_geocode, client):
    mock_geocode.return_value = Err(NotFoundError(ADDRESS_NOT_FOUND))
    response = await client.get("/api/geocode", params={"q": "nowhere"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"].startswith("Address not found")

@pytest.mark.asyncio
@patch("app.services.nominatim.geocode", new_callable=AsyncMock)
async def test_geocode_endpoint_upstream_failure_hides_detail(mock_geocode, client):
    mock_geocode.return_value = Err(GeocodingError(detail="503: overloaded"))
    response = await client.get("/api/geocode", params={"q": "New York"})
    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json() == {"error": "Geocoding service unavailable"}

@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}
