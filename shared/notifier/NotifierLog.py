from shared.models.notice import Notice
from shared.notifier.NotifierInterface import NotifierInterface


class NotifierLog(NotifierInterface):
    """Notices only end up in the log. Used by the one-shot runner."""

    def _publish(self, notice: Notice) -> None:
        pass
