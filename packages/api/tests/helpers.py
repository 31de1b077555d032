# This project was developed with assistance from AI tools.
"""Persona helpers for HTTP tests.

A Persona bundles a logged-in ``httpx.AsyncClient`` with the ids a test needs
to address it: the user id and, for agents and clients, the role row id.
"""

from dataclasses import dataclass

import httpx

PASSWORD = "correct-horse"


@dataclass
class Persona:
    http: httpx.AsyncClient
    user_id: int
    email: str
    role: str
    row_id: int | None = None
    password: str = PASSWORD


async def signup(
    http: httpx.AsyncClient,
    name: str,
    email: str,
    role: str,
    *,
    admin_id: int | None = None,
    password: str = PASSWORD,
) -> Persona:
    body = {"name": name, "email": email, "password": password, "role": role}
    if admin_id is not None:
        body["adminId"] = admin_id
    resp = await http.post("/api/auth/signup", json=body)
    assert resp.status_code == 201, resp.text
    user = resp.json()["user"]
    return Persona(http=http, user_id=user["id"], email=email, role=role, password=password)


async def login(http: httpx.AsyncClient, email: str, password: str, role: str) -> httpx.Response:
    return await http.post(
        "/api/auth/login", json={"email": email, "password": password, "role": role}
    )


async def create_agent(make_client, admin: Persona, name: str, email: str, **extra) -> Persona:
    """Admin provisions an agent; log the agent in with its temporary password."""
    resp = await admin.http.post("/api/admin/agents", json={"name": name, "email": email, **extra})
    assert resp.status_code == 201, resp.text
    data = resp.json()
    http = make_client()
    login_resp = await login(http, email, data["temporaryPassword"], "agent")
    assert login_resp.status_code == 200, login_resp.text
    return Persona(
        http=http,
        user_id=data["userId"],
        email=email,
        role="agent",
        row_id=data["id"],
        password=data["temporaryPassword"],
    )


async def create_client(make_client, agent: Persona, name: str, email: str, **extra) -> Persona:
    """Agent provisions a client; log the client in with its temporary password."""
    resp = await agent.http.post("/api/agent/clients", json={"name": name, "email": email, **extra})
    assert resp.status_code == 201, resp.text
    data = resp.json()
    http = make_client()
    login_resp = await login(http, email, data["temporaryPassword"], "client")
    assert login_resp.status_code == 200, login_resp.text
    return Persona(
        http=http,
        user_id=data["userId"],
        email=email,
        role="client",
        row_id=data["id"],
        password=data["temporaryPassword"],
    )
