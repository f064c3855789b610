from abc import ABC, abstractmethod
from typing import Callable

from shared.helper.HelperConfig import HelperConfig
from shared.models.notice import Notice, NoticeAction, NoticeLevel

# console colors per notice level
_LEVEL_COLORS: dict[str, str] = {
    "info": "cyan",
    "success": "green",
    "error": "red",
}


class NotifierInterface(ABC):
    """
    Surface for short-lived user notices. Raising a notice is fire-and-forget:
    callers never wait for it and it never raises.
    """

    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self.default_duration_ms = int(helper_config.get_number_val("NOTICE_DURATION_MS", default=5000))

    def notify(
        self,
        message: str,
        level: NoticeLevel = "info",
        duration_ms: int | None = None,
        action_label: str | None = None,
        on_action: Callable[[], None] | None = None,
    ) -> Notice:
        """
        Builds a notice, logs it and hands it to the engine.

        Args:
            message (str): Text shown to the user.
            level (NoticeLevel): "info", "success" or "error".
            duration_ms (int | None): Display time, NOTICE_DURATION_MS when None.
            action_label (str | None): Label of the optional action button.
            on_action (Callable | None): Runs when the action is triggered.

        Returns:
            Notice: The published notice.
        """
        notice = Notice(
            level=level,
            message=message,
            duration_ms=duration_ms or self.default_duration_ms,
            action=NoticeAction(label=action_label, on_click=on_action) if action_label else None,
        )
        log = self.logging.error if level == "error" else self.logging.info
        log("[notice] %s", message, color=_LEVEL_COLORS.get(level))
        self._publish(notice)
        return notice

    def info(self, message: str, **kwargs) -> Notice:
        return self.notify(message, level="info", **kwargs)

    def success(self, message: str, **kwargs) -> Notice:
        return self.notify(message, level="success", **kwargs)

    def error(self, message: str, **kwargs) -> Notice:
        return self.notify(message, level="error", **kwargs)

    @abstractmethod
    def _publish(self, notice: Notice) -> None:
        """
        Delivers the notice to wherever users see it.
        """
        pass
