"""HTTP steps shared by the API tests.

Each step performs one request and returns either the raw response or the
piece of the body the tests care about.
"""

import uuid

from httpx import AsyncClient, Response

API = "/api/v1"


async def create_station(client: AsyncClient, name: str) -> uuid.UUID:
    """Create a station and return its ID."""
    response = await client.post(f"{API}/stations", json={"name": name})
    assert response.status_code == 201, response.text
    return uuid.UUID(response.json()["id"])


async def create_line(client: AsyncClient, name: str = "Line 2", color: str = "green") -> uuid.UUID:
    """Create a line and return its ID."""
    response = await client.post(f"{API}/lines", json={"name": name, "color": color})
    assert response.status_code == 201, response.text
    return uuid.UUID(response.json()["id"])


async def add_section(
    client: AsyncClient,
    line_id: uuid.UUID,
    up_station_id: uuid.UUID,
    down_station_id: uuid.UUID,
    distance: int,
) -> Response:
    """Request a new section on a line."""
    return await client.post(
        f"{API}/lines/{line_id}/sections",
        json={
            "up_station_id": str(up_station_id),
            "down_station_id": str(down_station_id),
            "distance": distance,
        },
    )


async def remove_section(client: AsyncClient, line_id: uuid.UUID, station_id: uuid.UUID) -> Response:
    """Request removal of a line's terminal station."""
    return await client.delete(f"{API}/lines/{line_id}/sections", params={"station_id": str(station_id)})


async def get_line_station_ids(client: AsyncClient, line_id: uuid.UUID) -> list[uuid.UUID]:
    """Fetch a line and return its station IDs in path order."""
    response = await client.get(f"{API}/lines/{line_id}")
    assert response.status_code == 200, response.text
    return [uuid.UUID(station["id"]) for station in response.json()["stations"]]
