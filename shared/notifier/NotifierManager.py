from shared.helper.HelperConfig import HelperConfig
from shared.notifier.NotifierInterface import NotifierInterface


class NotifierManager:
    """Manager class to instantiate the configured notifier (NOTIFIER_ENGINE, "queue" or "log")."""

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.notifier = self._initialize_notifier()

    def _initialize_notifier(self) -> NotifierInterface:
        """
        Raises:
            ValueError: If the engine is unsupported.
        """
        engine = self.helper_config.get_string_val("NOTIFIER_ENGINE", default="queue").strip().lower().capitalize()
        class_name = f"Notifier{engine}"
        try:
            module = __import__(f"shared.notifier.{class_name}", fromlist=[class_name])
            notifier = getattr(module, class_name)(helper_config=self.helper_config)
            self.logging.debug("Instantiated notifier: %s", class_name)
            return notifier
        except (ImportError, AttributeError) as e:
            raise ValueError("Unsupported notifier engine '%s'. Error: %s" % (engine, e))

    def get_notifier(self) -> NotifierInterface:
        return self.notifier
