from fastapi import APIRouter, Depends, HTTPException, Request

from server.dependencies.auth import verify_api_key
from server.models.responses import InactiveRecommendation, MoveResult, RecommendationCard

router = APIRouter(tags=["recommendation"], dependencies=[Depends(verify_api_key)])


@router.get("/recommendation")
async def get_recommendation(request: Request) -> RecommendationCard | InactiveRecommendation:
    card = request.app.state.recommendation_panel.render()
    return card if card is not None else InactiveRecommendation()


@router.post("/recommendation/accept")
async def accept_recommendation(request: Request) -> MoveResult:
    """Move the recommended document. A failed move keeps the recommendation for a retry.

    Raises:
        HTTPException: 409 if no recommendation is active.
    """
    moved = await request.app.state.recommendation_panel.accept()
    if moved is None:
        raise HTTPException(status_code=409, detail="No active recommendation")
    return MoveResult(moved=moved)


@router.post("/recommendation/dismiss")
async def dismiss_recommendation(request: Request) -> InactiveRecommendation:
    request.app.state.recommendation_panel.dismiss()
    return InactiveRecommendation()


@router.get("/notices")
async def get_notices(request: Request) -> list[dict]:
    """Pending notices, oldest first. Reading them empties the queue."""
    notifier = request.app.state.notifier
    notices = notifier.drain() if hasattr(notifier, "drain") else []
    return [notice.model_dump(mode="json") for notice in notices]


@router.post("/notices/{notice_id}/action")
async def trigger_notice_action(request: Request, notice_id: str) -> dict:
    """Run the action offered with a notice, e.g. "Create Folder".

    Raises:
        HTTPException: 404 if the notice has no pending action.
    """
    notifier = request.app.state.notifier
    if not hasattr(notifier, "trigger_action") or not notifier.trigger_action(notice_id):
        raise HTTPException(status_code=404, detail="No pending action for this notice")
    return {"status": "done"}
