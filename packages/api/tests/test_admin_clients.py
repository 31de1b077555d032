# This project was developed with assistance from AI tools.
"""Admin management of clients and cross-admin assignment rules."""


async def test_create_client_with_agent(tree):
    resp = await tree.admin_a.http.post(
        "/api/admin/clients",
        json={
            "name": "Dora Direct",
            "email": "dora@example.com",
            "agentId": tree.ag2.row_id,
            "feeAmount": "1500.50",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["adminId"] == tree.admin_a.user_id
    assert body["agentId"] == tree.ag2.row_id
    assert body["feeAmount"] == 1500.5
    assert body["temporaryPassword"]

    agent = (await tree.admin_a.http.get(f"/api/admin/agents/{tree.ag2.row_id}")).json()
    assert agent["activeClients"] == 1


async def test_create_client_with_foreign_agent_is_forbidden(tree):
    resp = await tree.admin_a.http.post(
        "/api/admin/clients",
        json={"name": "Dora", "email": "dora@example.com", "agentId": tree.agb.row_id},
    )
    assert resp.status_code == 403

    # Nothing was written.
    clients = (await tree.admin_a.http.get("/api/admin/clients")).json()
    assert "dora@example.com" not in {c["user"]["email"] for c in clients["data"]}


async def test_list_clients_is_scoped(tree):
    body = (await tree.admin_a.http.get("/api/admin/clients")).json()
    assert {c["id"] for c in body["data"]} == {tree.c1.row_id, tree.c2.row_id}

    agent_view = (await tree.ag1.http.get("/api/agent/clients")).json()
    assert [c["id"] for c in agent_view["data"]] == [tree.c1.row_id]

    idle_agent = (await tree.ag2.http.get("/api/agent/clients")).json()
    assert idle_agent == {"data": [], "count": 0}


async def test_get_foreign_client_is_forbidden(tree):
    resp = await tree.admin_a.http.get(f"/api/admin/clients/{tree.cb.row_id}")
    assert resp.status_code == 403


async def test_assign_agent_on_update(tree):
    resp = await tree.admin_a.http.patch(
        f"/api/admin/clients/{tree.c2.row_id}",
        json={"agentId": tree.ag2.row_id, "nationality": "Kenyan"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["agentId"] == tree.ag2.row_id
    assert body["agent"]["id"] == tree.ag2.row_id
    assert body["nationality"] == "Kenyan"


async def test_update_with_foreign_agent_is_forbidden(tree):
    resp = await tree.admin_a.http.patch(
        f"/api/admin/clients/{tree.c2.row_id}", json={"agentId": tree.agb.row_id}
    )
    assert resp.status_code == 403
    assert resp.json() == {"error": "Agent belongs to a different admin"}

    client = (await tree.admin_a.http.get(f"/api/admin/clients/{tree.c2.row_id}")).json()
    assert client["agentId"] is None


async def test_update_with_missing_agent_is_404(tree):
    resp = await tree.admin_a.http.patch(
        f"/api/admin/clients/{tree.c2.row_id}", json={"agentId": 9999}
    )
    assert resp.status_code == 404


async def test_unassign_agent_updates_active_clients(tree):
    resp = await tree.admin_a.http.patch(
        f"/api/admin/clients/{tree.c1.row_id}", json={"agentId": None}
    )
    assert resp.status_code == 200
    assert resp.json()["agentId"] is None

    agent = (await tree.admin_a.http.get(f"/api/admin/agents/{tree.ag1.row_id}")).json()
    assert agent["activeClients"] == 0


async def test_reassignment_moves_active_client_count(tree):
    resp = await tree.admin_a.http.patch(
        f"/api/admin/clients/{tree.c1.row_id}", json={"agentId": tree.ag2.row_id}
    )
    assert resp.status_code == 200

    agents = {
        a["id"]: a["activeClients"]
        for a in (await tree.admin_a.http.get("/api/admin/agents")).json()["data"]
    }
    assert agents == {tree.ag1.row_id: 0, tree.ag2.row_id: 1}


async def test_application_assign_agent(tree):
    apps = (await tree.c2.http.post(
        "/api/client/applications",
        json={"visaType": "H-1B", "targetCountry": "United States"},
    )).json()
    resp = await tree.admin_a.http.patch(
        f"/api/admin/applications/{apps['id']}/assign-agent", json={"agentId": tree.ag1.row_id}
    )
    assert resp.status_code == 200
    assert resp.json()["client"]["agentId"] == tree.ag1.row_id

    foreign = await tree.admin_a.http.patch(
        f"/api/admin/applications/{apps['id']}/assign-agent", json={"agentId": tree.agb.row_id}
    )
    assert foreign.status_code == 403

    not_owner = await tree.admin_b.http.patch(
        f"/api/admin/applications/{apps['id']}/assign-agent", json={"agentId": tree.agb.row_id}
    )
    assert not_owner.status_code == 403


async def test_reset_client_password(tree):
    resp = await tree.admin_a.http.patch(
        f"/api/admin/clients/{tree.c1.row_id}/password", json={"newPassword": "12"}
    )
    assert resp.status_code == 400

    ok = await tree.admin_a.http.patch(
        f"/api/admin/clients/{tree.c1.row_id}/password", json={"newPassword": "long-enough"}
    )
    assert ok.status_code == 200
