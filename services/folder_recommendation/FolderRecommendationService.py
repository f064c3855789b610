"""Folder recommendation side effects.

Notifications through the backend notification function, user notices and
the single mutation of the subsystem: moving a document into a folder.
None of the methods raise; failures are logged and degrade to "nothing happened".
"""

from shared.clients.functions.FunctionsClientInterface import FunctionsClientInterface
from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.notifier.NotifierInterface import NotifierInterface

PATH_SEPARATOR = " > "


class FolderRecommendationService:
    """Announces folder suggestions and performs accepted moves."""

    def __init__(
        self,
        helper_config: HelperConfig,
        functions_client: FunctionsClientInterface,
        store_client: StoreClientInterface,
        notifier: NotifierInterface,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._functions = functions_client
        self._store = store_client
        self._notifier = notifier

    ##########################################
    ############# SUGGESTIONS ################
    ##########################################

    async def suggest_new_client_folder(self, user_id: str, document_id: str, client_name: str) -> None:
        """Ask the user to create a folder for a client that has none yet.

        The backend notification and the notice are independent: the notice is
        shown even if the notification call fails.

        Args:
            user_id (str): Owner of the notification.
            document_id (str): Document that revealed the client.
            client_name (str): Detected client name.
        """
        try:
            await self._functions.do_invoke_notification(
                action="create",
                user_id=user_id,
                notification={
                    "title": "New Client Detected",
                    "message": f"Consider creating a folder for client: {client_name}",
                    "type": "suggestion",
                    "category": "organization",
                    "priority": "normal",
                    "action_url": "/documents",
                    "metadata": {
                        "documentId": document_id,
                        "clientName": client_name,
                        "suggestedAction": "create_client_folder",
                    },
                },
            )
        except Exception as e:
            self.logging.error("Error suggesting new client folder for '%s': %s", client_name, e)

        self._notifier.info(
            f"New client detected: {client_name}. Consider creating a folder.",
            action_label="Create Folder",
            on_action=lambda: self._notifier.success(f"Creating folder for {client_name}..."),
        )

    def suggest_new_subfolder(self, subfolder_name: str, client_folder_name: str) -> None:
        self._notifier.info(
            f'Consider creating a "{subfolder_name}" folder under {client_folder_name}',
            action_label="Create Folder",
            on_action=lambda: self._notifier.success(f"Creating {subfolder_name} folder..."),
        )

    async def notify_folder_recommendation(
        self,
        user_id: str,
        document_id: str,
        document_title: str,
        target_folder_id: str,
        folder_path: list[str],
    ) -> None:
        """Publish a recommendation as backend notification and notice.

        The notice action only logs; the move itself goes through
        ``FolderRecommendationWatcher.move_document_to_folder``.
        """
        path_label = PATH_SEPARATOR.join(folder_path)
        message = f'AI suggests organizing "{document_title}" in folder: {path_label}'
        try:
            await self._functions.do_invoke_notification(
                action="folderRecommendation",
                user_id=user_id,
                notification={
                    "message": message,
                    "documentId": document_id,
                    "recommendedFolderId": target_folder_id,
                    "suggestedPath": folder_path,
                },
            )
        except Exception as e:
            self.logging.error("Error notifying folder recommendation for document %s: %s", document_id, e)

        self._notifier.info(
            message,
            action_label="Move File",
            on_action=lambda: self.logging.info("Moving file to %s", path_label),
        )

    def notify_document_type_no_client(self, folder_type: str) -> None:
        self._notifier.info(f'Document detected as "{folder_type}" but no client associated')

    ##########################################
    ################ MOVE ####################
    ##########################################

    async def move_document_to_folder(self, document_id: str, folder_id: str, folder_path: str) -> bool:
        """Set the parent folder of a document.

        Args:
            document_id (str): Document to move.
            folder_id (str): New parent folder.
            folder_path (str): Human readable target, e.g. "Jane Doe > Forms".

        Returns:
            bool: True if the store accepted the update.
        """
        try:
            await self._store.do_move_document(document_id, folder_id)
        except Exception as e:
            self.logging.error("Error moving document %s to folder %s: %s", document_id, folder_id, e)
            self._notifier.error("Failed to move document")
            return False

        self.logging.info("Moved document %s to %s", document_id, folder_path, color="green")
        self._notifier.success(f"Document moved to {folder_path}")
        return True
