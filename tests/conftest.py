"""Shared fixtures: in-memory stand-ins for the store and the functions backend."""

import itertools

import pytest

from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import get_logger
from shared.models.document import AnalysisPayload, CurrentUser, Document
from shared.notifier.NotifierQueue import NotifierQueue
from services.folder_recommendation.FolderRecommendationService import FolderRecommendationService
from services.folder_recommendation.FolderRecommendationWatcher import FolderRecommendationWatcher


class InMemoryStore:
    """Implements the StoreClientInterface request methods over a list of documents."""

    def __init__(self, documents=None, user=CurrentUser(id="user-1"), analyses=None):
        self.documents: list[Document] = list(documents or [])
        self.user = user
        self.analyses: dict[str, dict] = dict(analyses or {})
        self.fail_user = False
        self.fail_analysis = False
        self.fail_move = False
        self.moves: list[tuple[str, str | None]] = []
        self._ids = itertools.count(1)

    def _matches(self, doc: Document, equals: dict | None, contains: dict | None) -> bool:
        for column, value in (equals or {}).items():
            if getattr(doc, column) != value:
                return False
        for column, value in (contains or {}).items():
            if value.lower() not in (getattr(doc, column) or "").lower():
                return False
        return True

    def get(self, document_id: str) -> Document | None:
        return next((doc for doc in self.documents if doc.id == document_id), None)

    async def do_fetch_current_user(self):
        if self.fail_user:
            raise Exception("auth backend down")
        return self.user

    async def do_fetch_documents(self, equals=None, contains=None):
        return [doc for doc in self.documents if self._matches(doc, equals, contains)]

    async def do_fetch_children(self, folder_id, is_folder=None):
        equals = {"parent_folder_id": folder_id}
        if is_folder is not None:
            equals["is_folder"] = is_folder
        return await self.do_fetch_documents(equals=equals)

    async def do_fetch_analysis(self, document_id):
        if self.fail_analysis:
            raise Exception("analysis table unavailable")
        row = self.analyses.get(document_id)
        return AnalysisPayload.model_validate(row) if row else None

    async def do_update_document(self, document_id, values):
        doc = self.get(document_id)
        if doc is None:
            raise Exception(f"document {document_id} not found")
        for column, value in values.items():
            setattr(doc, column, value)

    async def do_move_document(self, document_id, folder_id):
        if self.fail_move:
            raise Exception("update rejected")
        self.moves.append((document_id, folder_id))
        await self.do_update_document(document_id, {"parent_folder_id": folder_id})

    async def do_move_folder_contents(self, source_folder_id, target_folder_id):
        for doc in self.documents:
            if doc.parent_folder_id == source_folder_id and not doc.is_folder:
                doc.parent_folder_id = target_folder_id

    async def do_insert_folder(self, name, folder_type, user_id, parent_id=None):
        folder = Document(
            id=f"new-{next(self._ids)}",
            title=name,
            is_folder=True,
            folder_type=folder_type,
            parent_folder_id=parent_id,
            user_id=user_id,
        )
        self.documents.append(folder)
        return folder

    async def do_delete_document(self, document_id):
        self.documents = [doc for doc in self.documents if doc.id != document_id]


class RecordingFunctions:
    """Records notification invocations, optionally failing them."""

    def __init__(self):
        self.calls: list[dict] = []
        self.fail = False

    async def do_invoke_notification(self, action, user_id, notification):
        if self.fail:
            raise Exception("function invocation failed")
        self.calls.append({"action": action, "userId": user_id, "notification": notification})


@pytest.fixture
def helper_config():
    return HelperConfig(logger=get_logger("case_organizer.tests"))


@pytest.fixture
def notifier(helper_config):
    return NotifierQueue(helper_config=helper_config)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def functions():
    return RecordingFunctions()


@pytest.fixture
def recommendation_service(helper_config, functions, store, notifier):
    return FolderRecommendationService(
        helper_config=helper_config,
        functions_client=functions,
        store_client=store,
        notifier=notifier,
    )


@pytest.fixture
def watcher(helper_config, store, recommendation_service):
    return FolderRecommendationWatcher(
        helper_config=helper_config,
        store_client=store,
        recommendation_service=recommendation_service,
    )
