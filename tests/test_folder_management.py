"""Tests for FolderManagementService against the in-memory store."""

import pytest

from shared.models.document import Document
from services.folder_management.FolderManagementService import FolderManagementService


@pytest.fixture
def folder_service(helper_config, store, notifier):
    return FolderManagementService(helper_config=helper_config, store_client=store, notifier=notifier)


def titles_under(store, parent_id) -> list[str]:
    return sorted(doc.title for doc in store.documents if doc.parent_folder_id == parent_id)


@pytest.mark.asyncio
class TestCreate:
    async def test_client_folder_gets_standard_subfolders(self, folder_service, store):
        folder_id = await folder_service.create_folder("Jane Doe", "client", "user-1")
        assert store.get(folder_id).folder_type == "client"
        assert titles_under(store, folder_id) == ["Documents", "Financial Sheets", "Forms"]

    async def test_create_is_idempotent(self, folder_service, store):
        first = await folder_service.create_folder("Jane Doe", "client", "user-1")
        second = await folder_service.create_folder("Jane Doe", "client", "user-1")
        assert first == second
        assert len(store.documents) == 4

    async def test_subfolder_under_new_client(self, folder_service, store):
        folder_id = await folder_service.create_folder("Bank Statements", "financial", "user-1", client_name="John Roe")
        client = next(doc for doc in store.documents if doc.title == "John Roe")
        assert client.folder_type == "client"
        assert store.get(folder_id).parent_folder_id == client.id

    async def test_empty_name_is_rejected(self, folder_service, store, notifier):
        assert await folder_service.create_folder("  ", "general", "user-1") is None
        assert store.documents == []
        assert notifier.peek()[-1].message == "Please enter a folder name"

    async def test_store_failure_reports(self, folder_service, store, notifier):
        async def broken(*args, **kwargs):
            raise Exception("insert rejected")

        store.do_insert_folder = broken
        assert await folder_service.create_folder("Jane Doe", "client", "user-1") is None
        assert notifier.peek()[-1].message == "Failed to create folder"


@pytest.mark.asyncio
class TestUpdateDelete:
    async def test_rename(self, folder_service, store):
        store.documents = [Document(id="f1", title="Old", is_folder=True)]
        assert await folder_service.rename_folder("f1", " New ") is True
        assert store.get("f1").title == "New"

    async def test_rename_unknown_folder(self, folder_service):
        assert await folder_service.rename_folder("nope", "New") is False

    async def test_delete_empty(self, folder_service, store):
        store.documents = [Document(id="f1", title="Empty", is_folder=True)]
        assert await folder_service.delete_folder("f1") is True
        assert store.documents == []

    async def test_delete_non_empty_is_refused(self, folder_service, store, notifier):
        store.documents = [
            Document(id="f1", title="Full", is_folder=True),
            Document(id="d1", title="a.pdf", parent_folder_id="f1"),
        ]
        assert await folder_service.delete_folder("f1") is False
        assert store.get("f1") is not None
        assert notifier.peek()[-1].message == "Cannot delete non-empty folder"


@pytest.mark.asyncio
class TestMerge:
    async def test_merge_moves_documents_and_removes_duplicates(self, folder_service, store):
        store.documents = [
            Document(id="a", title="Jane Doe", is_folder=True, folder_type="client", user_id="user-1"),
            Document(id="b", title="Jane Doe (2)", is_folder=True, folder_type="client", user_id="user-1"),
            Document(id="b-forms", title="Forms", is_folder=True, folder_type="form", parent_folder_id="b", user_id="user-1"),
            Document(id="d1", title="form 47.pdf", parent_folder_id="b-forms"),
            Document(id="d2", title="notes.pdf", parent_folder_id="b"),
        ]

        assert await folder_service.merge_client_folders("Jane Doe", "user-1") is True

        assert store.get("b") is None
        assert store.get("b-forms") is None
        new_forms = next(doc for doc in store.documents if doc.title == "Forms")
        assert new_forms.parent_folder_id == "a"
        assert store.get("d1").parent_folder_id == new_forms.id
        assert store.get("d2").parent_folder_id == "a"

    async def test_nothing_to_merge(self, folder_service, store):
        store.documents = [Document(id="a", title="Jane Doe", is_folder=True, folder_type="client", user_id="user-1")]
        assert await folder_service.merge_client_folders("Jane Doe", "user-1") is False

    async def test_empty_name_raises(self, folder_service):
        with pytest.raises(ValueError):
            await folder_service.merge_client_folders(" ", "user-1")


def test_search_forms(folder_service):
    documents = [
        Document(id="1", title="Form 47 - Jane Doe.pdf"),
        Document(id="2", title="Form 76 - John Roe.pdf"),
        Document(id="3", title="budget.xls"),
        Document(id="4", title="Form 47 folder", is_folder=True),
        Document(id="5", title="scan.pdf", metadata={"formType": "form-76"}),
    ]
    assert [d.id for d in folder_service.search_forms(documents)] == ["1", "2", "5"]
    assert [d.id for d in folder_service.search_forms(documents, "jane")] == ["1"]


@pytest.mark.asyncio
async def test_client_documents(folder_service, store):
    store.documents = [
        Document(id="c1", title="Jane Doe", is_folder=True, folder_type="client"),
        Document(id="d1", title="a.pdf", metadata={"client_id": "c1"}),
        Document(id="d2", title="b.pdf", metadata={"client_id": "c2"}),
    ]
    assert [d.id for d in await folder_service.get_client_documents("c1")] == ["c1", "d1"]
