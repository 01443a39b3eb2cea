from fastapi import FastAPI
from fastapi.testclient import TestClient

from catalog_dashboard.app.main import mount_dashboard

from .conftest import make_service


def test_list_collections_and_documents(client, store):
    store.set_document("services", "svc1", make_service("svc1"))
    store.set_document("jactoUsers", "u1", {"name": "Ana"})

    assert sorted(client.get("/collections").json()) == ["jactoUsers", "services"]
    docs = client.get("/collections/jactoUsers").json()
    assert docs == [{"id": "u1", "name": "Ana"}]


def test_unknown_collection_has_no_documents(client):
    assert client.get("/collections/nothing").json() == []


def test_jacto_users_crud(client, store):
    store.set_document("jactoUsers", "u1", {"name": "Ana", "role": "tecnico"})

    assert client.get("/jacto-users").json() == [{"id": "u1", "name": "Ana", "role": "tecnico"}]

    updated = client.put("/jacto-users/u1", json={"role": "gerente"}).json()
    assert updated["data"]["name"] == "Ana"
    assert updated["data"]["role"] == "gerente"

    assert client.put("/jacto-users/u1", json={}).json() == {"error": "Missing user data"}

    assert client.delete("/jacto-users/u1").json() == {"success": True, "message": "User deleted successfully"}
    missing = client.get("/jacto-users/u1")
    assert missing.status_code == 404
    assert missing.json() == {"error": "User not found"}


def test_jacto_users_have_no_create_endpoint(client):
    assert client.post("/jacto-users", json={"id": "u2"}).status_code == 405


def test_dashboard_page_is_served_next_to_the_api(tmp_path):
    (tmp_path / "index.html").write_text("<h1>Dashboard</h1>")
    (tmp_path / "app.js").write_text("console.log('ok');")
    app = FastAPI()

    @app.get("/services")
    async def services():
        return {"data": []}

    mount_dashboard(app, str(tmp_path))
    client = TestClient(app)

    assert "Dashboard" in client.get("/").text
    assert client.get("/app.js").status_code == 200
    assert client.get("/services").json() == {"data": []}
