# This project was developed with assistance from AI tools.
"""Client self-service: applications, profile and agent choice."""


async def test_client_files_application(tree):
    resp = await tree.c2.http.post(
        "/api/client/applications",
        json={"visaType": "Tier 4", "targetCountry": "United Kingdom", "purpose": "MSc"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["clientId"] == tree.c2.row_id
    assert body["status"] == "Document Review"
    assert body["progress"] == 10
    assert body["lastAction"] == "Application Submitted"

    mine = (await tree.c2.http.get("/api/client/applications")).json()
    assert [a["id"] for a in mine["data"]] == [body["id"]]


async def test_client_only_sees_own_applications(tree):
    mine = (await tree.c1.http.get("/api/client/applications")).json()
    assert mine["count"] == 1
    assert all(a["clientId"] == tree.c1.row_id for a in mine["data"])

    others = (await tree.c2.http.get("/api/client/applications")).json()
    assert others["count"] == 0


async def test_progress_update(tree):
    app_id = (await tree.c1.http.get("/api/client/applications")).json()["data"][0]["id"]
    resp = await tree.c1.http.patch(
        f"/api/client/applications/{app_id}/progress",
        json={"progress": 60, "lastAction": "Passport uploaded"},
    )
    assert resp.status_code == 200
    assert resp.json()["progress"] == 60
    assert resp.json()["lastAction"] == "Passport uploaded"


async def test_progress_out_of_range_is_400(tree):
    app_id = (await tree.c1.http.get("/api/client/applications")).json()["data"][0]["id"]
    for value in (-1, 101):
        resp = await tree.c1.http.patch(
            f"/api/client/applications/{app_id}/progress", json={"progress": value}
        )
        assert resp.status_code == 400


async def test_progress_on_foreign_application_is_forbidden(tree):
    app_id = (await tree.c1.http.get("/api/client/applications")).json()["data"][0]["id"]
    resp = await tree.c2.http.patch(
        f"/api/client/applications/{app_id}/progress", json={"progress": 50}
    )
    assert resp.status_code == 403


async def test_profile_update(tree):
    resp = await tree.c2.http.patch(
        "/api/client/profile",
        json={"passportNumber": "X1234567", "education": "BSc", "feeAmount": "1"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["passportNumber"] == "X1234567"
    assert body["education"] == "BSc"
    assert body["feeAmount"] is None

    again = (await tree.c2.http.get("/api/client/profile")).json()
    assert again["passportNumber"] == "X1234567"


async def test_choose_agent_within_own_admin(tree):
    resp = await tree.c2.http.patch("/api/client/choose-agent", json={"agentId": tree.ag2.row_id})
    assert resp.status_code == 200
    assert resp.json()["agentId"] == tree.ag2.row_id

    assigned = (await tree.c2.http.get("/api/client/agent")).json()
    assert assigned["agent"]["id"] == tree.ag2.row_id

    clients = (await tree.ag2.http.get("/api/agent/clients")).json()
    assert [c["id"] for c in clients["data"]] == [tree.c2.row_id]


async def test_choose_agent_of_other_admin_is_forbidden(tree):
    resp = await tree.c2.http.patch("/api/client/choose-agent", json={"agentId": tree.agb.row_id})
    assert resp.status_code == 403

    assigned = (await tree.c2.http.get("/api/client/agent")).json()
    assert assigned == {"agent": None}


async def test_choose_missing_agent_is_404(tree):
    resp = await tree.c2.http.patch("/api/client/choose-agent", json={"agentId": 9999})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Agent not found"}


async def test_assigned_agent_for_provisioned_client(tree):
    assigned = (await tree.c1.http.get("/api/client/agent")).json()
    assert assigned["agent"]["id"] == tree.ag1.row_id
    assert assigned["agent"]["user"]["email"] == tree.ag1.email
