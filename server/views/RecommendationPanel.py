"""Recommendation panel: presents the watcher's recommendation and forwards user actions.

The panel keeps no state of its own. Whatever the watcher holds is what it shows.
"""

from server.models.responses import CardAction, RecommendationCard
from services.folder_recommendation.FolderRecommendationService import PATH_SEPARATOR
from services.folder_recommendation.FolderRecommendationWatcher import FolderRecommendationWatcher


class RecommendationPanel:
    def __init__(self, watcher: FolderRecommendationWatcher) -> None:
        self._watcher = watcher

    def render(self) -> RecommendationCard | None:
        """Card for the active recommendation, None when there is nothing to show."""
        recommendation = self._watcher.recommendation
        if not self._watcher.show_recommendation or recommendation is None:
            return None
        return RecommendationCard(
            document_id=recommendation.document_id,
            suggested_folder_id=recommendation.suggested_folder_id,
            document_title=recommendation.document_title,
            folder_path=recommendation.folder_path,
            path_label=PATH_SEPARATOR.join(recommendation.folder_path),
            actions=[
                CardAction(label="Accept", endpoint="/recommendation/accept"),
                CardAction(label="Dismiss", endpoint="/recommendation/dismiss"),
            ],
        )

    async def accept(self) -> bool | None:
        """
        Move the document to the recommended folder. Clearing the state is left to the watcher.

        Returns:
            bool | None: Result of the move, None if no recommendation was shown.
        """
        recommendation = self._watcher.recommendation
        if not self._watcher.show_recommendation or recommendation is None:
            return None
        return await self._watcher.move_document_to_folder(
            recommendation.document_id,
            recommendation.suggested_folder_id,
            PATH_SEPARATOR.join(recommendation.folder_path),
        )

    def dismiss(self) -> None:
        self._watcher.dismiss_recommendation()
