from collections import deque

from shared.helper.HelperConfig import HelperConfig
from shared.models.notice import Notice
from shared.notifier.NotifierInterface import NotifierInterface


class NotifierQueue(NotifierInterface):
    """
    Keeps the latest notices in memory until a client drains them.
    The oldest notices are dropped once NOTIFIER_QUEUE_SIZE is reached.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        size = int(helper_config.get_number_val("NOTIFIER_QUEUE_SIZE", default=100))
        self._queue: deque[Notice] = deque(maxlen=size)
        # notices keep their action callback until triggered, even after draining
        self._actions: dict[str, Notice] = {}

    def _publish(self, notice: Notice) -> None:
        self._queue.append(notice)
        if notice.action and notice.action.on_click:
            self._actions[notice.id] = notice
            while len(self._actions) > (self._queue.maxlen or 0):
                self._actions.pop(next(iter(self._actions)))

    def peek(self) -> list[Notice]:
        return list(self._queue)

    def drain(self) -> list[Notice]:
        """Return all pending notices and empty the queue."""
        notices = list(self._queue)
        self._queue.clear()
        return notices

    def trigger_action(self, notice_id: str) -> bool:
        """
        Runs the action callback of a notice once.

        Returns:
            bool: False if the notice is unknown or has no action.
        """
        notice = self._actions.pop(notice_id, None)
        if notice is None:
            return False
        try:
            notice.action.on_click()
        except Exception as e:
            self.logging.error("Action '%s' of notice %s failed: %s", notice.action.label, notice_id, e)
            return False
        return True
