# This project was developed with assistance from AI tools.
"""Commission creation, status transitions and totals."""

import pytest


async def _create(tree, amount="250.00", agent=None, client=None):
    return await tree.admin_a.http.post(
        "/api/admin/commissions",
        json={
            "agentId": (agent or tree.ag1).row_id,
            "clientId": (client or tree.c1).row_id,
            "amount": amount,
        },
    )


async def test_create_commission(tree):
    resp = await _create(tree)
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "Pending"
    assert body["amount"] == 250
    assert body["agent"]["id"] == tree.ag1.row_id
    assert body["client"]["user"]["email"] == tree.c1.email


async def test_commission_requires_assigned_client(tree):
    resp = await _create(tree, client=tree.c2)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Client is not assigned to this agent"}


async def test_commission_for_foreign_agent_is_forbidden(tree):
    resp = await _create(tree, agent=tree.agb)
    assert resp.status_code == 403


@pytest.mark.parametrize("amount", ["0", "-5"])
async def test_commission_amount_must_be_positive(tree, amount):
    resp = await _create(tree, amount=amount)
    assert resp.status_code == 400


async def test_commission_lifecycle(tree):
    commission_id = (await _create(tree)).json()["id"]
    url = f"/api/admin/commissions/{commission_id}/status"

    approved = await tree.admin_a.http.patch(url, json={"status": "Approved"})
    assert approved.status_code == 200
    paid = await tree.admin_a.http.patch(url, json={"status": "Paid"})
    assert paid.status_code == 200
    assert paid.json()["status"] == "Paid"


@pytest.mark.parametrize(
    "path,target",
    [
        (["Paid"], None),
        (["Rejected"], "Approved"),
        (["Approved"], "Pending"),
        (["Approved", "Paid"], "Rejected"),
    ],
)
async def test_invalid_commission_transitions(tree, path, target):
    commission_id = (await _create(tree)).json()["id"]
    url = f"/api/admin/commissions/{commission_id}/status"

    steps = path if target is None else path + [target]
    *allowed, refused = steps
    for status in allowed:
        assert (await tree.admin_a.http.patch(url, json={"status": status})).status_code == 200
    resp = await tree.admin_a.http.patch(url, json={"status": refused})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Cannot change commission")


async def test_other_admin_cannot_move_commission(tree):
    commission_id = (await _create(tree)).json()["id"]
    resp = await tree.admin_b.http.patch(
        f"/api/admin/commissions/{commission_id}/status", json={"status": "Approved"}
    )
    assert resp.status_code == 403

    missing = await tree.admin_a.http.patch(
        "/api/admin/commissions/9999/status", json={"status": "Approved"}
    )
    assert missing.status_code == 404


async def test_totals_by_status(tree):
    first = (await _create(tree, amount="100")).json()["id"]
    second = (await _create(tree, amount="40.50")).json()["id"]
    await _create(tree, amount="9.50")
    await tree.admin_a.http.patch(
        f"/api/admin/commissions/{first}/status", json={"status": "Approved"}
    )
    await tree.admin_a.http.patch(
        f"/api/admin/commissions/{second}/status", json={"status": "Rejected"}
    )

    body = (await tree.admin_a.http.get("/api/admin/commissions")).json()
    assert body["count"] == 3
    assert body["totals"] == {"pending": 9.5, "approved": 100, "paid": 0, "rejected": 40.5}

    agent_view = (await tree.ag1.http.get("/api/agent/commissions")).json()
    assert agent_view["count"] == 3
    assert agent_view["totals"]["approved"] == 100

    assert (await tree.ag2.http.get("/api/agent/commissions")).json()["count"] == 0
    assert (await tree.admin_b.http.get("/api/admin/commissions")).json()["count"] == 0
