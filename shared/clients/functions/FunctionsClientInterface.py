from abc import abstractmethod

from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface


class FunctionsClientInterface(ClientInterface):
    """
    Invokes serverless functions of the hosted backend. Only the notification
    function is used; its response body is never read.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "functions"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_function(self, function_name: str) -> str:
        """
        Returns the endpoint path invoking a function (e.g. "/functions/v1/handle-notifications").
        """
        pass

    @abstractmethod
    def _get_notification_function_name(self) -> str:
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_invoke(self, function_name: str, body: dict) -> None:
        """
        Invokes a function with a JSON body.

        Raises:
            Exception: If the function answers with a non-2xx status.
        """
        await self.do_request(
            method="POST",
            endpoint=self._get_endpoint_function(function_name),
            json=body,
            raise_on_error=True,
        )

    async def do_invoke_notification(self, action: str, user_id: str, notification: dict) -> None:
        """
        Sends ``{action, userId, notification}`` to the notification function.

        Args:
            action (str): "create" or "folderRecommendation".
            user_id (str): Owner of the notification.
            notification (dict): Action specific payload.

        Raises:
            Exception: If the function call fails.
        """
        self.logging.debug("Invoking notification action '%s' for user %s", action, user_id)
        await self.do_invoke(
            self._get_notification_function_name(),
            {"action": action, "userId": user_id, "notification": notification},
        )
