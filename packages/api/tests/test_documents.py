# This project was developed with assistance from AI tools.
"""Document links: URL checks, attach rules and review."""

import pytest


def _doc(owner_type: str, owner_id: int, path: str = "https://files.example.com/passport.pdf"):
    return {
        "ownerType": owner_type,
        "ownerId": owner_id,
        "name": "Passport",
        "type": "passport",
        "path": path,
    }


@pytest.mark.parametrize(
    "path",
    [
        "javascript:alert(1)",
        "data:text/html;base64,PHNjcmlwdD4=",
        "file:///etc/passwd",
        "ftp://files.example.com/a.pdf",
        "//files.example.com/a.pdf",
        "https://",
        "not a url",
    ],
)
async def test_unsafe_urls_are_rejected(tree, path):
    resp = await tree.c1.http.post("/api/documents", json=_doc("client", tree.c1.row_id, path))
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Invalid document URL. Only http:// and https:// URLs are allowed."
    }

    mine = (await tree.c1.http.get("/api/documents/my")).json()
    assert mine["count"] == 0


async def test_client_uploads_own_document(tree):
    resp = await tree.c1.http.post("/api/documents", json=_doc("client", tree.c1.row_id))
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "Pending"
    assert body["ownerType"] == "client"
    assert body["uploadedById"] == tree.c1.user_id
    assert body["uploadedBy"]["email"] == tree.c1.email

    mine = (await tree.c1.http.get("/api/documents/my")).json()
    assert [d["id"] for d in mine["data"]] == [body["id"]]


async def test_http_url_is_accepted(tree):
    resp = await tree.c1.http.post(
        "/api/documents", json=_doc("client", tree.c1.row_id, "http://files.example.com/a.pdf")
    )
    assert resp.status_code == 201


async def test_client_cannot_upload_for_another_client(tree):
    resp = await tree.c1.http.post("/api/documents", json=_doc("client", tree.c2.row_id))
    assert resp.status_code == 403


async def test_agent_uploads_for_assigned_client_only(tree):
    ok = await tree.ag1.http.post("/api/documents", json=_doc("client", tree.c1.row_id))
    assert ok.status_code == 201

    denied = await tree.ag1.http.post("/api/documents", json=_doc("client", tree.c2.row_id))
    assert denied.status_code == 403

    own = await tree.ag1.http.post("/api/documents", json=_doc("agent", tree.ag1.row_id))
    assert own.status_code == 201
    other_agent = await tree.ag1.http.post("/api/documents", json=_doc("agent", tree.ag2.row_id))
    assert other_agent.status_code == 403


async def test_admin_uploads_within_tree(tree):
    own = await tree.admin_a.http.post("/api/documents", json=_doc("admin", tree.admin_a.user_id))
    assert own.status_code == 201
    agent_doc = await tree.admin_a.http.post(
        "/api/documents", json=_doc("agent", tree.ag2.row_id)
    )
    assert agent_doc.status_code == 201
    foreign = await tree.admin_a.http.post("/api/documents", json=_doc("client", tree.cb.row_id))
    assert foreign.status_code == 403

    mine = (await tree.admin_a.http.get("/api/documents/my")).json()
    assert [d["id"] for d in mine["data"]] == [own.json()["id"]]

    everything = (await tree.admin_a.http.get("/api/admin/documents")).json()
    assert {d["id"] for d in everything["data"]} == {own.json()["id"], agent_doc.json()["id"]}


async def test_agent_reviews_assigned_client_document(tree):
    doc = (await tree.c1.http.post("/api/documents", json=_doc("client", tree.c1.row_id))).json()

    listed = (await tree.ag1.http.get(f"/api/agent/clients/{tree.c1.row_id}/documents")).json()
    assert [d["id"] for d in listed["data"]] == [doc["id"]]

    resp = await tree.ag1.http.patch(
        f"/api/documents/{doc['id']}/status",
        json={"status": "Rejected", "notes": "Scan is blurry"},
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "Rejected"
    assert resp.json()["notes"] == "Scan is blurry"


async def test_document_status_may_move_freely(tree):
    doc = (await tree.c1.http.post("/api/documents", json=_doc("client", tree.c1.row_id))).json()
    for status in ("Approved", "Pending", "Under Review"):
        resp = await tree.ag1.http.patch(
            f"/api/documents/{doc['id']}/status", json={"status": status}
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == status


async def test_agent_cannot_review_unassigned_client_document(tree):
    doc = (await tree.c2.http.post("/api/documents", json=_doc("client", tree.c2.row_id))).json()
    resp = await tree.ag1.http.patch(
        f"/api/documents/{doc['id']}/status", json={"status": "Approved"}
    )
    assert resp.status_code == 403
    assert resp.json() == {"error": "You can only manage documents from your assigned clients"}

    listing = await tree.ag1.http.get(f"/api/agent/clients/{tree.c2.row_id}/documents")
    assert listing.status_code == 403


async def test_admin_reviews_and_other_admin_cannot(tree):
    doc = (await tree.c2.http.post("/api/documents", json=_doc("client", tree.c2.row_id))).json()
    ok = await tree.admin_a.http.patch(
        f"/api/documents/{doc['id']}/status", json={"status": "Under Review"}
    )
    assert ok.status_code == 200

    denied = await tree.admin_b.http.patch(
        f"/api/documents/{doc['id']}/status", json={"status": "Approved"}
    )
    assert denied.status_code == 403

    by_owner = (
        await tree.admin_a.http.get(f"/api/admin/documents/client/{tree.c2.row_id}")
    ).json()
    assert by_owner["data"][0]["status"] == "Under Review"


async def test_review_missing_document_is_404(tree):
    resp = await tree.admin_a.http.patch("/api/documents/9999/status", json={"status": "Approved"})
    assert resp.status_code == 404
