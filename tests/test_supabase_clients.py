"""Request shape tests for the Supabase store and functions clients."""

import json

import httpx
import pytest

from shared.clients.functions.supabase.FunctionsClientSupabase import FunctionsClientSupabase
from shared.clients.store.supabase.StoreClientSupabase import StoreClientSupabase


@pytest.fixture
def supabase_env(monkeypatch):
    for client_type in ("STORE", "FUNCTIONS"):
        monkeypatch.setenv(f"{client_type}_SUPABASE_BASE_URL", "https://project.supabase.co")
        monkeypatch.setenv(f"{client_type}_SUPABASE_API_KEY", "anon-key")
    monkeypatch.delenv("STORE_SUPABASE_ACCESS_TOKEN", raising=False)


def mock_client(client, handler):
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client


def test_missing_base_url_fails_at_construction(helper_config, monkeypatch):
    monkeypatch.delenv("STORE_SUPABASE_BASE_URL", raising=False)
    monkeypatch.setenv("STORE_SUPABASE_API_KEY", "anon-key")
    with pytest.raises(ValueError):
        StoreClientSupabase(helper_config)


@pytest.mark.asyncio
class TestStoreClient:
    async def test_fetch_documents_filters_and_headers(self, supabase_env, helper_config):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": 7, "title": "Forms", "is_folder": True, "parent_folder_id": "f1"}])

        client = mock_client(StoreClientSupabase(helper_config), handler)
        documents = await client.do_fetch_children("f1", is_folder=True)

        request = seen[0]
        assert request.url.path == "/rest/v1/documents"
        assert request.url.params["parent_folder_id"] == "eq.f1"
        assert request.url.params["is_folder"] == "eq.true"
        assert request.url.params["order"] == "created_at.asc"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer anon-key"
        assert documents[0].id == "7"
        assert documents[0].metadata == {}
        await client.close()

    async def test_move_document_patches_parent(self, supabase_env, helper_config):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        client = mock_client(StoreClientSupabase(helper_config), handler)
        await client.do_move_document("d1", "f2")

        assert seen[0].method == "PATCH"
        assert seen[0].url.params["id"] == "eq.d1"
        assert json.loads(seen[0].content) == {"parent_folder_id": "f2"}

    async def test_insert_folder_asks_for_representation(self, supabase_env, helper_config):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json=[{"id": "new", "title": "Forms", "is_folder": True, "folder_type": "form"}])

        client = mock_client(StoreClientSupabase(helper_config), handler)
        folder = await client.do_insert_folder("Forms", "form", "user-1", parent_id="f1")

        assert seen[0].headers["prefer"] == "return=representation"
        body = json.loads(seen[0].content)
        assert body["parent_folder_id"] == "f1"
        assert body["is_folder"] is True
        assert folder.id == "new"
        assert folder.folder_type == "form"

    async def test_unauthorized_user_is_none(self, supabase_env, helper_config):
        client = mock_client(StoreClientSupabase(helper_config), lambda request: httpx.Response(401, json={}))
        assert await client.do_fetch_current_user() is None

    async def test_current_user(self, supabase_env, helper_config, monkeypatch):
        monkeypatch.setenv("STORE_SUPABASE_ACCESS_TOKEN", "session-token")
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "user-1", "email": "jane@example.com"})

        client = mock_client(StoreClientSupabase(helper_config), handler)
        user = await client.do_fetch_current_user()

        assert seen[0].url.path == "/auth/v1/user"
        assert seen[0].headers["authorization"] == "Bearer session-token"
        assert user.id == "user-1"

    async def test_analysis(self, supabase_env, helper_config):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["document_id"] == "eq.d1"
            return httpx.Response(200, json=[{"content": {"extracted_info": {"clientName": "Jane Doe"}}}])

        client = mock_client(StoreClientSupabase(helper_config), handler)
        analysis = await client.do_fetch_analysis("d1")
        assert analysis.content.extracted_info.clientName == "Jane Doe"

    async def test_missing_analysis(self, supabase_env, helper_config):
        client = mock_client(StoreClientSupabase(helper_config), lambda request: httpx.Response(200, json=[]))
        assert await client.do_fetch_analysis("d1") is None

    async def test_error_status_raises(self, supabase_env, helper_config):
        client = mock_client(StoreClientSupabase(helper_config), lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(Exception):
            await client.do_fetch_documents()

    async def test_request_before_boot_raises(self, supabase_env, helper_config):
        with pytest.raises(Exception):
            await StoreClientSupabase(helper_config).do_fetch_documents()


@pytest.mark.asyncio
async def test_notification_invocation(supabase_env, helper_config):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    client = mock_client(FunctionsClientSupabase(helper_config), handler)
    await client.do_invoke_notification("create", "user-1", {"title": "New Client Detected"})

    assert seen[0].url.path == "/functions/v1/handle-notifications"
    assert json.loads(seen[0].content) == {
        "action": "create",
        "userId": "user-1",
        "notification": {"title": "New Client Detected"},
    }
