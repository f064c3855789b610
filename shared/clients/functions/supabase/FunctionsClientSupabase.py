from shared.clients.functions.FunctionsClientInterface import FunctionsClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


class FunctionsClientSupabase(FunctionsClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._api_key = self.get_config_val("API_KEY", default=None, val_type="string")
        self._notification_function = self.get_config_val("NOTIFICATION_FUNCTION", default="handle-notifications", val_type="string")

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
            EnvConfig(env_key="NOTIFICATION_FUNCTION", val_type="string", default="handle-notifications"),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        return {"apikey": self._api_key, "Authorization": f"Bearer {self._api_key}"}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/functions/v1/"

    def _get_endpoint_function(self, function_name: str) -> str:
        return f"/functions/v1/{function_name}"

    def _get_notification_function_name(self) -> str:
        return self._notification_function
