import asyncio

from fastapi import APIRouter, Depends, Request

from server.dependencies.auth import verify_api_key
from server.models.requests import WebhookRequest
from services.folder_recommendation.recommendation_runner import do_refresh

router = APIRouter(prefix="/webhook", tags=["webhook"])


@router.post("/document")
async def webhook_document(
    request: Request,
    body: WebhookRequest,
    _: None = Depends(verify_api_key),
) -> dict:
    """Rescan for folder recommendations after a document was added, changed or moved.

    The scan runs as a fire-and-forget task so the caller gets an answer at once.
    Overlapping scans are resolved by the watcher, the newest one wins.
    """
    request.app.state.logging.info("Webhook received for document_id=%r", body.document_id)
    task = asyncio.create_task(do_refresh(request.app.state.store_client, request.app.state.watcher))
    request.app.state.background_tasks.add(task)
    task.add_done_callback(request.app.state.background_tasks.discard)
    return {"status": "accepted", "document_id": body.document_id}


async def cancel_background_tasks(tasks: set[asyncio.Task]) -> None:
    """Cancel scans that are still running and wait until they have stopped."""
    pending = [task for task in tasks if not task.done()]
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    tasks.clear()
