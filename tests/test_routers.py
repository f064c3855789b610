"""HTTP tests for the recommendation, folder and webhook routers."""

import asyncio

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from shared.models.document import Document
from server.routers.FolderRouter import router as folder_router
from server.routers.RecommendationRouter import router as recommendation_router
from server.routers.WebhookRouter import cancel_background_tasks, router as webhook_router
from server.views.RecommendationPanel import RecommendationPanel
from services.folder_management.FolderManagementService import FolderManagementService

API_KEY = "test-key"
HEADERS = {"X-Api-Key": API_KEY}


def jane_documents() -> list[Document]:
    return [
        Document(id="f1", title="Jane Doe", is_folder=True, folder_type="client", user_id="user-1"),
        Document(id="f2", title="Forms", is_folder=True, folder_type="form", parent_folder_id="f1", user_id="user-1"),
        Document(
            id="d1",
            title="form 47 - Jane Doe.pdf",
            ai_processing_status="complete",
            metadata={"client_name": "Jane Doe"},
        ),
    ]


@pytest.fixture
def app(monkeypatch, helper_config, store, notifier, watcher):
    monkeypatch.setenv("APP_API_KEY", API_KEY)
    app = FastAPI()
    app.include_router(webhook_router)
    app.include_router(recommendation_router)
    app.include_router(folder_router)
    app.state.logging = helper_config.get_logger()
    app.state.helper_config = helper_config
    app.state.store_client = store
    app.state.notifier = notifier
    app.state.watcher = watcher
    app.state.recommendation_panel = RecommendationPanel(watcher)
    app.state.folder_service = FolderManagementService(helper_config, store, notifier)
    app.state.background_tasks = set()
    return app


@pytest_asyncio.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def webhook_scan(client, app):
    response = await client.post("/webhook/document", json={"document_id": "d1"}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    await asyncio.gather(*app.state.background_tasks)


@pytest.mark.asyncio
class TestRecommendationFlow:
    async def test_requires_api_key(self, client):
        assert (await client.get("/recommendation")).status_code == 401
        assert (await client.get("/recommendation", headers={"X-Api-Key": "wrong"})).status_code == 401

    async def test_inactive_by_default(self, client):
        response = await client.get("/recommendation", headers=HEADERS)
        assert response.json() == {"active": False}

    async def test_webhook_scan_then_accept(self, client, app, store):
        store.documents = jane_documents()
        await webhook_scan(client, app)

        card = (await client.get("/recommendation", headers=HEADERS)).json()
        assert card["documentId"] == "d1"
        assert card["suggestedFolderId"] == "f2"
        assert card["folderPath"] == ["Jane Doe", "Forms"]
        assert card["pathLabel"] == "Jane Doe > Forms"
        assert card["documentTitle"] == "form 47 - Jane Doe.pdf"
        assert "document_id" not in card
        assert [action["label"] for action in card["actions"]] == ["Accept", "Dismiss"]

        response = await client.post("/recommendation/accept", headers=HEADERS)
        assert response.json() == {"moved": True}
        assert store.moves == [("d1", "f2")]
        assert (await client.get("/recommendation", headers=HEADERS)).json() == {"active": False}

        notices = (await client.get("/notices", headers=HEADERS)).json()
        assert notices[-1]["message"] == "Document moved to Jane Doe > Forms"
        assert "on_click" not in (notices[0]["action"] or {})
        assert (await client.get("/notices", headers=HEADERS)).json() == []

    async def test_accept_without_recommendation(self, client):
        assert (await client.post("/recommendation/accept", headers=HEADERS)).status_code == 409

    async def test_dismiss(self, client, app, store):
        store.documents = jane_documents()
        await webhook_scan(client, app)
        response = await client.post("/recommendation/dismiss", headers=HEADERS)
        assert response.json() == {"active": False}
        assert store.moves == []

    async def test_notice_action(self, client, app, store):
        store.documents = jane_documents()
        store.documents[2].metadata = {"client_name": "John Roe"}
        await webhook_scan(client, app)
        notice = (await client.get("/notices", headers=HEADERS)).json()[0]
        assert notice["action"]["label"] == "Create Folder"

        response = await client.post(f"/notices/{notice['id']}/action", headers=HEADERS)
        assert response.status_code == 200
        assert (await client.post(f"/notices/{notice['id']}/action", headers=HEADERS)).status_code == 404


@pytest.mark.asyncio
class TestFolders:
    async def test_list_folders(self, client, store):
        store.documents = jane_documents()
        tree = (await client.get("/folders", headers=HEADERS)).json()
        assert [f["id"] for f in tree] == ["f1"]
        assert tree[0]["children"][0]["name"] == "Forms"

    async def test_create_and_delete(self, client, store):
        created = (await client.post("/folders", json={"name": "Acme", "folder_type": "client"}, headers=HEADERS)).json()
        assert created["created"] is True
        assert len(store.documents) == 4

        response = await client.delete(f"/folders/{created['id']}", headers=HEADERS)
        assert response.json() == {"success": False}

    async def test_create_requires_user(self, client, store):
        store.user = None
        response = await client.post("/folders", json={"name": "Acme"}, headers=HEADERS)
        assert response.status_code == 401

    async def test_rename(self, client, store):
        store.documents = jane_documents()
        response = await client.patch("/folders/f2", json={"name": "Legal Forms"}, headers=HEADERS)
        assert response.json() == {"success": True}
        assert store.get("f2").title == "Legal Forms"

    async def test_merge_with_empty_name(self, client):
        response = await client.post("/folders/merge", json={"client_name": ""}, headers=HEADERS)
        assert response.status_code == 400

    async def test_search_forms_and_clients(self, client, store):
        store.documents = jane_documents()
        forms = (await client.get("/folders/forms", params={"query": "jane"}, headers=HEADERS)).json()
        assert [f["id"] for f in forms] == ["d1"]
        clients = (await client.get("/clients", headers=HEADERS)).json()
        assert clients == [{"id": "f1", "name": "Jane Doe"}]

    async def test_client_documents(self, client, store):
        store.documents = jane_documents() + [
            Document(id="d2", title="budget.xls", metadata={"client_id": "f1"}),
            Document(id="d3", title="other.pdf", metadata={"client_id": "f9"}),
        ]
        documents = (await client.get("/clients/f1/documents", headers=HEADERS)).json()
        assert [d["id"] for d in documents] == ["f1", "d2"]


@pytest.mark.asyncio
async def test_shutdown_cancels_running_scans():
    finished = asyncio.create_task(asyncio.sleep(0))
    await finished
    running = asyncio.create_task(asyncio.Event().wait())
    tasks = {finished, running}

    await cancel_background_tasks(tasks)

    assert running.cancelled()
    assert not finished.cancelled()
    assert tasks == set()
