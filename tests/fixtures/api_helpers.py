from typing import Dict

from httpx import AsyncClient


async def create_organization(client: AsyncClient, headers: Dict[str, str], name: str) -> str:
    response = await client.post("/team/create", json={"name": name}, headers=headers)
    assert response.status_code == 303
    location = response.headers["location"]
    assert location.endswith("?created=true")
    return location.split("/team/")[1].split("?")[0]


async def create_invite(
    client: AsyncClient,
    headers: Dict[str, str],
    organization_id: str,
    email: str,
    role: str = "member",
) -> str:
    response = await client.post(
        f"/team/{organization_id}/invite",
        json={"email": email, "role": role},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["invite_url"].rsplit("/", 1)[1]
