"""Recommendation runner entry point.

Loads the current documents and folders and runs one recommendation scan.
The API server calls do_refresh() from its webhook; run directly for a
one-shot scan with notices written to the log.

Usage:
    python -m services.folder_recommendation.recommendation_runner
"""

import asyncio

from shared.clients.functions.FunctionsClientManager import FunctionsClientManager
from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.clients.store.StoreClientManager import StoreClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging
from shared.models.document import FolderRecommendation
from shared.notifier.NotifierLog import NotifierLog
from services.folder_management.folder_mapper import build_folder_tree
from services.folder_recommendation.FolderRecommendationService import FolderRecommendationService
from services.folder_recommendation.FolderRecommendationWatcher import FolderRecommendationWatcher


async def do_refresh(store_client: StoreClientInterface, watcher: FolderRecommendationWatcher) -> FolderRecommendation | None:
    """Reload the collections and hand them to the watcher.

    Returns:
        FolderRecommendation | None: The recommendation activated by this refresh.
    """
    try:
        documents = await store_client.do_fetch_documents()
    except Exception as e:
        watcher.logging.error("Could not load documents for recommendation scan: %s", e)
        return None
    folders = build_folder_tree(documents)
    return await watcher.on_collections_changed(documents, folders)


async def main() -> None:
    logger = setup_logging()
    config = HelperConfig(logger=logger)
    store_client = StoreClientManager(helper_config=config).get_client()
    functions_client = FunctionsClientManager(helper_config=config).get_client()

    try:
        await store_client.boot()
        await functions_client.boot()

        service = FolderRecommendationService(
            helper_config=config,
            functions_client=functions_client,
            store_client=store_client,
            notifier=NotifierLog(helper_config=config),
        )
        watcher = FolderRecommendationWatcher(
            helper_config=config,
            store_client=store_client,
            recommendation_service=service,
        )
        recommendation = await do_refresh(store_client, watcher)
        if recommendation is None:
            logger.info("No folder recommendation.")
        else:
            logger.info(
                "Recommendation: '%s' -> %s",
                recommendation.document_title,
                " > ".join(recommendation.folder_path),
                color="cyan",
            )
    finally:
        await store_client.close()
        await functions_client.close()


if __name__ == "__main__":
    asyncio.run(main())
