from abc import abstractmethod

from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface
from shared.models.document import AnalysisPayload, CurrentUser, Document


class StoreClientInterface(ClientInterface):
    """
    Access to the hosted document store: current user, the ``documents`` table
    (documents and folders share it) and the ``document_analysis`` table.

    Subclasses provide endpoints, filter syntax and response parsing; the
    request flow lives here.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "store"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_user(self) -> str:
        """
        Returns the endpoint path resolving the current user (e.g. "/auth/v1/user").
        """
        pass

    @abstractmethod
    def _get_endpoint_documents(self) -> str:
        """
        Returns the endpoint path of the documents table (e.g. "/rest/v1/documents").
        """
        pass

    @abstractmethod
    def _get_endpoint_analysis(self) -> str:
        """
        Returns the endpoint path of the analysis table (e.g. "/rest/v1/document_analysis").
        """
        pass

    ################ QUERY BUILDER ##################
    @abstractmethod
    def _get_filter_params(self, equals: dict | None = None, contains: dict | None = None) -> dict:
        """
        Translates column filters into backend query parameters.

        Args:
            equals (dict | None): Columns that must equal the given value.
            contains (dict | None): Columns that must contain the given text, case-insensitive.

        Returns:
            dict: Query parameters for the request.
        """
        pass

    @abstractmethod
    def _get_listing_params(self, select: str = "*", order: str | None = None, limit: int | None = None) -> dict:
        """
        Returns selection, ordering and limit query parameters.
        """
        pass

    @abstractmethod
    def _get_return_headers(self) -> dict:
        """
        Returns the headers asking the backend to send written rows back.
        """
        pass

    ############### RESPONSE PARSER ###############
    @abstractmethod
    def _parse_endpoint_user(self, response: dict) -> CurrentUser | None:
        pass

    @abstractmethod
    def _parse_endpoint_document(self, response: dict) -> Document:
        pass

    @abstractmethod
    def _parse_endpoint_analysis(self, response: list) -> AnalysisPayload | None:
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    ################ AUTH ##################
    async def do_fetch_current_user(self) -> CurrentUser | None:
        """
        Resolves the user the service acts for.

        Returns:
            CurrentUser | None: The user, or None if the backend does not accept the session.

        Raises:
            Exception: On any other non-2xx status.
        """
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_user())
        if resp.status_code in (401, 403):
            return None
        if resp.status_code >= 300:
            raise Exception(f"User lookup failed with status {resp.status_code}")
        return self._parse_endpoint_user(resp.json())

    ################ DOCUMENTS ##################
    async def do_fetch_documents(self, equals: dict | None = None, contains: dict | None = None) -> list[Document]:
        """
        Fetches documents and folders, oldest first.

        Args:
            equals (dict | None): Optional equality filters, e.g. {"is_folder": True}.
            contains (dict | None): Optional case-insensitive substring filters.

        Returns:
            list[Document]: The matching rows.
        """
        params = self._get_listing_params(order="created_at.asc")
        params.update(self._get_filter_params(equals=equals, contains=contains))
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_documents(), params=params, raise_on_error=True)
        documents = [self._parse_endpoint_document(item) for item in resp.json()]
        self.logging.debug("Fetched %d documents from %s", len(documents), self._get_engine_name())
        return documents

    async def do_fetch_children(self, folder_id: str, is_folder: bool | None = None) -> list[Document]:
        """
        Fetches the direct children of a folder, optionally only folders or only documents.
        """
        equals: dict = {"parent_folder_id": folder_id}
        if is_folder is not None:
            equals["is_folder"] = is_folder
        return await self.do_fetch_documents(equals=equals)

    async def do_update_document(self, document_id: str, values: dict) -> None:
        """
        Updates columns of a single document.

        Raises:
            Exception: If the backend rejects the update.
        """
        await self.do_request(
            method="PATCH",
            endpoint=self._get_endpoint_documents(),
            params=self._get_filter_params(equals={"id": document_id}),
            json=values,
            raise_on_error=True,
        )

    async def do_move_document(self, document_id: str, folder_id: str | None) -> None:
        """
        Points a document at a new parent folder. Last writer wins.
        """
        await self.do_update_document(document_id, {"parent_folder_id": folder_id})

    async def do_move_folder_contents(self, source_folder_id: str, target_folder_id: str) -> None:
        """
        Moves every non-folder document of one folder into another.
        """
        await self.do_request(
            method="PATCH",
            endpoint=self._get_endpoint_documents(),
            params=self._get_filter_params(equals={"parent_folder_id": source_folder_id, "is_folder": False}),
            json={"parent_folder_id": target_folder_id},
            raise_on_error=True,
        )

    async def do_insert_folder(self, name: str, folder_type: str, user_id: str, parent_id: str | None = None) -> Document:
        """
        Creates a folder row.

        Returns:
            Document: The created folder.
        """
        resp = await self.do_request(
            method="POST",
            endpoint=self._get_endpoint_documents(),
            json={
                "title": name,
                "is_folder": True,
                "folder_type": folder_type,
                "parent_folder_id": parent_id,
                "user_id": user_id,
                "type": "folder",
                "size": 0,
            },
            additional_headers=self._get_return_headers(),
            raise_on_error=True,
        )
        rows = resp.json()
        row = rows[0] if isinstance(rows, list) else rows
        return self._parse_endpoint_document(row)

    async def do_delete_document(self, document_id: str) -> None:
        await self.do_request(
            method="DELETE",
            endpoint=self._get_endpoint_documents(),
            params=self._get_filter_params(equals={"id": document_id}),
            raise_on_error=True,
        )

    ################ ANALYSIS ##################
    async def do_fetch_analysis(self, document_id: str) -> AnalysisPayload | None:
        """
        Fetches the stored AI analysis of a document.

        Returns:
            AnalysisPayload | None: The analysis, or None if the document was not analysed.
        """
        params = self._get_listing_params(select="content", limit=1)
        params.update(self._get_filter_params(equals={"document_id": document_id}))
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_analysis(), params=params, raise_on_error=True)
        return self._parse_endpoint_analysis(resp.json())
