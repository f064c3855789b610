from shared.helper.HelperConfig import HelperConfig
from shared.clients.functions.FunctionsClientInterface import FunctionsClientInterface


class FunctionsClientManager:
    """Manager class to instantiate the configured serverless functions client."""

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        engine = self.helper_config.get_string_val("FUNCTIONS_ENGINE", default="supabase")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> FunctionsClientInterface:
        """Instantiate the functions client for the configured engine.

        Raises:
            ValueError: If the engine is unsupported or cannot be imported.
        """
        engine = self._get_engine_from_env()
        class_name = f"FunctionsClient{engine}"
        try:
            module = __import__(
                f"shared.clients.functions.{engine.lower()}.{class_name}",
                fromlist=[class_name],
            )
            client_class = getattr(module, class_name)
            client = client_class(helper_config=self.helper_config)
            self.logging.debug("Instantiated functions client for engine: %s", engine)
            return client
        except (ImportError, AttributeError) as e:
            raise ValueError("Unsupported functions engine '%s'. Error: %s" % (engine, e))

    def get_client(self) -> FunctionsClientInterface:
        return self.client
