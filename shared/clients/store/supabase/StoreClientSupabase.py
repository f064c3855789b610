from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig
from shared.models.document import AnalysisPayload, CurrentUser, Document


class StoreClientSupabase(StoreClientInterface):
    """Supabase store: PostgREST tables under /rest/v1, GoTrue under /auth/v1."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._api_key = self.get_config_val("API_KEY", default=None, val_type="string")
        self._access_token = self.get_config_val("ACCESS_TOKEN", default="", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Supabase"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="API_KEY", val_type="string", default=None),
            EnvConfig(env_key="ACCESS_TOKEN", val_type="string", default=""),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        # without a user session the anon/service key doubles as bearer token
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
        }

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/rest/v1/"

    def _get_endpoint_user(self) -> str:
        return "/auth/v1/user"

    def _get_endpoint_documents(self) -> str:
        return "/rest/v1/documents"

    def _get_endpoint_analysis(self) -> str:
        return "/rest/v1/document_analysis"

    ################ QUERY BUILDER ##################
    def _get_filter_params(self, equals: dict | None = None, contains: dict | None = None) -> dict:
        params = {}
        for column, value in (equals or {}).items():
            if value is None:
                params[column] = "is.null"
            elif isinstance(value, bool):
                params[column] = f"eq.{str(value).lower()}"
            else:
                params[column] = f"eq.{value}"
        for column, value in (contains or {}).items():
            params[column] = f"ilike.*{value}*"
        return params

    def _get_listing_params(self, select: str = "*", order: str | None = None, limit: int | None = None) -> dict:
        params: dict = {"select": select}
        if order:
            params["order"] = order
        if limit:
            params["limit"] = limit
        return params

    def _get_return_headers(self) -> dict:
        return {"Prefer": "return=representation"}

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_endpoint_user(self, response: dict) -> CurrentUser | None:
        if not response or not response.get("id"):
            return None
        return CurrentUser(id=str(response.get("id")), email=response.get("email"))

    def _parse_endpoint_document(self, response: dict) -> Document:
        return Document(
            id=str(response.get("id")),
            title=response.get("title") or "",
            is_folder=bool(response.get("is_folder")),
            folder_type=response.get("folder_type"),
            parent_folder_id=response.get("parent_folder_id"),
            metadata=response.get("metadata") or {},
            ai_processing_status=response.get("ai_processing_status"),
            user_id=response.get("user_id"),
            created_at=response.get("created_at"),
            updated_at=response.get("updated_at"),
        )

    def _parse_endpoint_analysis(self, response: list) -> AnalysisPayload | None:
        if not response:
            return None
        row = response[0]
        if not row or row.get("content") is None:
            return None
        return AnalysisPayload.model_validate(row)
