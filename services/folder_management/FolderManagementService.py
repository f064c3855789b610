"""Folder management tools: create, rename, delete, merge and search.

Operates directly on the document store. User facing methods report through
notices and return a success value; ``merge_client_folders`` is a batch
operation and propagates store errors to its caller.
"""

from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import ClientInfo, Document, FolderStructure
from shared.notifier.NotifierInterface import NotifierInterface
from services.folder_management.client_extraction import extract_clients_from_documents, filter_documents_by_client
from services.folder_management.folder_mapper import build_folder_tree
from services.folder_recommendation.folder_identification import is_document_form47, is_document_form76

FOLDER_TYPES = ("client", "form", "financial", "general")

# created inside every new client folder
CLIENT_SUBFOLDERS: tuple[tuple[str, str], ...] = (
    ("Forms", "form"),
    ("Financial Sheets", "financial"),
    ("Documents", "general"),
)


class FolderManagementService:
    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        notifier: NotifierInterface,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._store = store_client
        self._notifier = notifier

    ##########################################
    ################ READ ####################
    ##########################################

    async def get_folder_tree(self) -> list[FolderStructure]:
        documents = await self._store.do_fetch_documents(equals={"is_folder": True})
        return build_folder_tree(documents)

    async def get_clients(self) -> list[ClientInfo]:
        return extract_clients_from_documents(await self._store.do_fetch_documents())

    async def get_client_documents(self, client_id: str) -> list[Document]:
        """Documents tagged with the client id, including the client folder itself."""
        return filter_documents_by_client(await self._store.do_fetch_documents(), client_id)

    def search_forms(self, documents: list[Document], query: str = "") -> list[Document]:
        """Form 47 / Form 76 documents whose title contains the query, case-insensitive."""
        query = query.strip().lower()
        return [
            doc for doc in documents
            if not doc.is_folder
            and (is_document_form47(doc) or is_document_form76(doc))
            and query in (doc.title or "").lower()
        ]

    ##########################################
    ################ CREATE ##################
    ##########################################

    async def create_folder_if_not_exists(
        self,
        name: str,
        folder_type: str,
        user_id: str,
        parent_id: str | None = None,
    ) -> str:
        """
        Return the id of the folder with this name and type under the parent, creating it if needed.

        Raises:
            Exception: If the store cannot be read or written.
        """
        existing = await self._store.do_fetch_documents(
            equals={
                "is_folder": True,
                "title": name,
                "folder_type": folder_type,
                "user_id": user_id,
                "parent_folder_id": parent_id,
            }
        )
        if existing:
            return existing[0].id
        folder = await self._store.do_insert_folder(name, folder_type, user_id, parent_id)
        self.logging.info("Created %s folder '%s' (%s)", folder_type, name, folder.id)
        return folder.id

    async def create_folder(
        self,
        name: str,
        folder_type: str,
        user_id: str,
        parent_id: str | None = None,
        client_name: str | None = None,
    ) -> str | None:
        """
        Create a folder the way the folder dialog does.

        A non-client folder with ``client_name`` is placed in that client's
        folder, which is created when missing. A new client folder receives
        the standard subfolders.

        Returns:
            str | None: Id of the folder, None if the name was empty or the store failed.
        """
        if not name or not name.strip():
            self._notifier.error("Please enter a folder name")
            return None
        if folder_type not in FOLDER_TYPES:
            folder_type = "general"

        try:
            final_parent_id = parent_id
            if folder_type != "client" and client_name:
                final_parent_id = await self.create_folder_if_not_exists(client_name, "client", user_id)

            folder_id = await self.create_folder_if_not_exists(name.strip(), folder_type, user_id, final_parent_id)

            if folder_type == "client":
                for subfolder_name, subfolder_type in CLIENT_SUBFOLDERS:
                    await self.create_folder_if_not_exists(subfolder_name, subfolder_type, user_id, folder_id)
        except Exception as e:
            self.logging.error("Error creating folder '%s': %s", name, e)
            self._notifier.error("Failed to create folder")
            return None

        self._notifier.success(f"Folder {name.strip()} created successfully")
        return folder_id

    ##########################################
    ################ UPDATE ##################
    ##########################################

    async def rename_folder(self, folder_id: str, new_name: str) -> bool:
        if not new_name or not new_name.strip():
            self._notifier.error("Please enter a folder name")
            return False
        try:
            await self._store.do_update_document(folder_id, {"title": new_name.strip()})
        except Exception as e:
            self.logging.error("Error renaming folder %s: %s", folder_id, e)
            self._notifier.error("Failed to rename folder")
            return False
        self._notifier.success("Folder renamed successfully")
        return True

    async def delete_folder(self, folder_id: str) -> bool:
        """Delete a folder that has no children. Non-empty folders are refused."""
        try:
            children = await self._store.do_fetch_children(folder_id)
            if children:
                self._notifier.error("Cannot delete non-empty folder")
                return False
            await self._store.do_delete_document(folder_id)
        except Exception as e:
            self.logging.error("Error deleting folder %s: %s", folder_id, e)
            self._notifier.error("Failed to delete folder")
            return False
        self._notifier.success("Folder deleted successfully")
        return True

    async def merge_client_folders(self, client_name: str, user_id: str) -> bool:
        """
        Merge every folder whose title contains the client name into one client folder.

        Subfolders are recreated under the target by name and type, their
        documents moved and the emptied source folders deleted. A failing
        move skips the deletion of that source folder.

        Returns:
            bool: False when there is nothing to merge.

        Raises:
            ValueError: If the client name is empty.
            Exception: If the store cannot be read or the target cannot be created.
        """
        if not client_name or not client_name.strip():
            raise ValueError("Client name cannot be empty")
        client_name = client_name.strip()

        matches = await self._store.do_fetch_documents(
            equals={"is_folder": True, "user_id": user_id},
            contains={"title": client_name},
        )
        if len(matches) <= 1:
            self.logging.info("No folders to merge for client: %s", client_name)
            return False
        self.logging.info("Found %d folders matching client: %s", len(matches), client_name)

        target_id = await self.create_folder_if_not_exists(client_name, "client", user_id)

        for folder in matches:
            if folder.id == target_id:
                continue
            for subfolder in await self._store.do_fetch_children(folder.id, is_folder=True):
                new_subfolder_id = await self.create_folder_if_not_exists(
                    subfolder.title, subfolder.folder_type or "form", user_id, target_id
                )
                try:
                    await self._store.do_move_folder_contents(subfolder.id, new_subfolder_id)
                    await self._store.do_delete_document(subfolder.id)
                except Exception as e:
                    self.logging.error("Error merging subfolder %s into %s: %s", subfolder.id, new_subfolder_id, e)

            try:
                await self._store.do_move_folder_contents(folder.id, target_id)
            except Exception as e:
                self.logging.error("Error moving documents from folder %s to %s: %s", folder.id, target_id, e)
                continue
            try:
                await self._store.do_delete_document(folder.id)
            except Exception as e:
                self.logging.error("Error deleting empty folder %s: %s", folder.id, e)

        self.logging.info("Merged folders for client: %s", client_name, color="green")
        return True
