"""FastAPI application entry point for the case folder organizer."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface
from shared.clients.store.StoreClientManager import StoreClientManager
from shared.clients.functions.FunctionsClientManager import FunctionsClientManager
from shared.notifier.NotifierManager import NotifierManager
from services.folder_management.FolderManagementService import FolderManagementService
from services.folder_recommendation.FolderRecommendationService import FolderRecommendationService
from services.folder_recommendation.FolderRecommendationWatcher import FolderRecommendationWatcher
from services.folder_recommendation.recommendation_runner import do_refresh
from server.views.RecommendationPanel import RecommendationPanel
from server.routers.WebhookRouter import cancel_background_tasks, router as webhook_router
from server.routers.RecommendationRouter import router as recommendation_router
from server.routers.FolderRouter import router as folder_router

logging = setup_logging()
app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)

    store_client = StoreClientManager(helper_config=app.state.helper_config).get_client()
    functions_client = FunctionsClientManager(helper_config=app.state.helper_config).get_client()
    notifier = NotifierManager(helper_config=app.state.helper_config).get_notifier()

    logging.info("Booting all clients...")
    for client in [store_client, functions_client]:
        await client.boot()
    logging.info("All clients booted successfully.")

    recommendation_service = FolderRecommendationService(
        helper_config=app.state.helper_config,
        functions_client=functions_client,
        store_client=store_client,
        notifier=notifier,
    )
    watcher = FolderRecommendationWatcher(
        helper_config=app.state.helper_config,
        store_client=store_client,
        recommendation_service=recommendation_service,
    )

    app.state.store_client = store_client
    app.state.functions_client = functions_client
    app.state.notifier = notifier
    app.state.watcher = watcher
    app.state.recommendation_panel = RecommendationPanel(watcher)
    app.state.folder_service = FolderManagementService(
        helper_config=app.state.helper_config,
        store_client=store_client,
        notifier=notifier,
    )
    app.state.background_tasks = set()

    await check_connections([store_client, functions_client])

    # first scan, later ones are triggered by the document webhook
    await do_refresh(store_client, watcher)

    # while the app is running...
    yield

    # when the app shuts down, stop running scans before their clients go away
    await cancel_background_tasks(app.state.background_tasks)
    logging.info("Shutting down, closing all clients...")
    for client in [store_client, functions_client]:
        await client.close()
    logging.info("All clients closed.")


app = FastAPI(
    title="case_organizer",
    description=(
        "Folder organization for insolvency case documents. "
        "Recommends the client folder for uncategorized documents "
        "and offers folder management tools on top of the document store."
    ),
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(webhook_router)
app.include_router(recommendation_router)
app.include_router(folder_router)


async def check_connections(clients: list[ClientInterface]) -> None:
    """Check connectivity to all configured backends on startup.

    Failures are not fatal: the server stays up and every operation degrades on its own.
    """
    for client in clients:
        try:
            result: httpx.Response = await client.do_healthcheck()
        except httpx.HTTPError as e:
            logging.warning("%s client '%s' is not reachable: %s", client.get_client_type(), client.get_engine_name(), e)
            continue
        if not result.is_success:
            logging.warning(
                "%s client '%s' answered healthcheck with status %d.",
                client.get_client_type(),
                client.get_engine_name(),
                result.status_code,
            )


if __name__ == "__main__":
    import uvicorn

    logging.info(
        "Starting case_organizer API Server v%s from root dir: %s on port 8000...",
        app_version,
        os.environ.get("ROOT_DIR", "unknown"),
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
