"""Watches the document and folder collections and keeps one folder recommendation.

Every change of the collections triggers a scan. A scan picks the first
uncategorized, AI-processed document, classifies it and either suggests a
client folder, announces a client-less document type, or activates a
recommendation pointing at the client folder (or its matching subfolder).

Scans are not cancelled when a newer one starts. Each scan carries a
generation number instead and only the newest generation may write state.
"""

from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import Document, FolderRecommendation, FolderStructure
from services.folder_recommendation.FolderRecommendationService import FolderRecommendationService
from services.folder_recommendation.folder_identification import (
    classify_generic_folder_type,
    extract_client_name,
    find_appropriate_subfolder,
    find_client_folder,
    is_document_form47,
    is_document_form76,
    is_financial_document,
    is_uncategorized_candidate,
)


class FolderRecommendationWatcher:
    """Holds the active recommendation and exposes accept/dismiss actions."""

    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        recommendation_service: FolderRecommendationService,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._store = store_client
        self._service = recommendation_service
        self._subfolder_depth = int(helper_config.get_number_val("RECOMMENDATION_SUBFOLDER_DEPTH", default=1))

        self.show_recommendation: bool = False
        self.recommendation: FolderRecommendation | None = None
        self.scan_generation: int = 0

    ##########################################
    ################ STATE ###################
    ##########################################

    def set_show_recommendation(self, show: bool) -> None:
        self.show_recommendation = show

    def dismiss_recommendation(self) -> None:
        """Forget the current recommendation. The document may be recommended again by the next scan."""
        self.show_recommendation = False
        self.recommendation = None

    def _is_current(self, generation: int) -> bool:
        return generation == self.scan_generation

    ##########################################
    ################ SCAN ####################
    ##########################################

    async def on_collections_changed(
        self,
        documents: list[Document],
        folders: list[FolderStructure],
    ) -> FolderRecommendation | None:
        """Entry point for every change of the document or folder collection.

        Args:
            documents (list[Document]): All documents and folders, in store order.
            folders (list[FolderStructure]): Root folders with their children.

        Returns:
            FolderRecommendation | None: The recommendation activated by this scan.
        """
        if not documents or not folders:
            return None
        self.scan_generation += 1
        return await self.scan(documents, folders, self.scan_generation)

    async def scan(
        self,
        documents: list[Document],
        folders: list[FolderStructure],
        generation: int,
    ) -> FolderRecommendation | None:
        """Look for one document to recommend a folder for.

        Only the first qualifying document is handled; later ones wait for the
        next scan. Never raises.
        """
        try:
            user = await self._store.do_fetch_current_user()
        except Exception as e:
            self.logging.error("Error checking for recommendations, user lookup failed: %s", e)
            return None
        if user is None:
            return None

        document = next((doc for doc in documents if is_uncategorized_candidate(doc)), None)
        if document is None:
            return None

        try:
            data = await self._store.do_fetch_analysis(document.id)
        except Exception as e:
            self.logging.warning("Could not load analysis for document %s: %s", document.id, e)
            data = None

        if not self._is_current(generation):
            self.logging.debug("Discarding scan %d, scan %d is newer", generation, self.scan_generation)
            return None

        is_form47 = is_document_form47(document, data)
        is_form76 = is_document_form76(document, data)
        is_financial = is_financial_document(document)
        client_name = extract_client_name(document, data)

        if not client_name:
            folder_type = classify_generic_folder_type(is_form47, is_form76, is_financial)
            self._service.notify_document_type_no_client(folder_type)
            return None

        self.logging.info("Found client name for folder recommendation: %s", client_name)
        client_folder = find_client_folder(folders, client_name)
        if client_folder is None:
            self.logging.info("Client folder for '%s' not found, suggesting creation", client_name)
            await self._service.suggest_new_client_folder(user.id, document.id, client_name)
            return None

        match = find_appropriate_subfolder(
            client_folder, is_form47, is_form76, is_financial, max_depth=self._subfolder_depth
        )
        if match.suggested_subfolder_name:
            self._service.suggest_new_subfolder(match.suggested_subfolder_name, client_folder.name)

        recommendation = FolderRecommendation(
            document_id=document.id,
            suggested_folder_id=match.target_folder_id,
            document_title=document.title,
            folder_path=match.folder_path,
        )
        self.recommendation = recommendation
        self.show_recommendation = True

        await self._service.notify_folder_recommendation(
            user.id,
            document.id,
            document.title,
            match.target_folder_id,
            match.folder_path,
        )
        return recommendation

    ##########################################
    ################ ACTIONS #################
    ##########################################

    async def move_document_to_folder(self, document_id: str, folder_id: str, folder_path: str) -> bool:
        """Move a document and clear the recommendation if the move succeeded.

        On failure the recommendation stays so the user can retry. A scan that
        finished during the move may have activated a recommendation for another
        document; that one is kept.
        """
        moved = await self._service.move_document_to_folder(document_id, folder_id, folder_path)
        if moved and self.recommendation is not None and self.recommendation.document_id == document_id:
            self.dismiss_recommendation()
        return moved
