from fastapi import APIRouter, Depends, HTTPException, Request

from server.dependencies.auth import verify_api_key
from server.models.requests import CreateFolderRequest, MergeClientFoldersRequest, RenameFolderRequest
from server.models.responses import FolderCreated, OperationResult
from shared.models.document import ClientInfo, Document, FolderStructure

router = APIRouter(tags=["folders"], dependencies=[Depends(verify_api_key)])


async def _current_user_id(request: Request) -> str:
    user = await request.app.state.store_client.do_fetch_current_user()
    if user is None:
        raise HTTPException(status_code=401, detail="You must be logged in to manage folders")
    return user.id


@router.get("/folders")
async def list_folders(request: Request) -> list[FolderStructure]:
    return await request.app.state.folder_service.get_folder_tree()


@router.get("/clients")
async def list_clients(request: Request) -> list[ClientInfo]:
    return await request.app.state.folder_service.get_clients()


@router.get("/clients/{client_id}/documents")
async def list_client_documents(request: Request, client_id: str) -> list[Document]:
    return await request.app.state.folder_service.get_client_documents(client_id)


@router.get("/folders/forms")
async def search_forms(request: Request, query: str = "") -> list[Document]:
    documents = await request.app.state.store_client.do_fetch_documents()
    return request.app.state.folder_service.search_forms(documents, query)


@router.post("/folders")
async def create_folder(request: Request, body: CreateFolderRequest) -> FolderCreated:
    user_id = await _current_user_id(request)
    folder_id = await request.app.state.folder_service.create_folder(
        body.name,
        body.folder_type,
        user_id,
        parent_id=body.parent_id,
        client_name=body.client_name,
    )
    return FolderCreated(id=folder_id, created=folder_id is not None)


@router.patch("/folders/{folder_id}")
async def rename_folder(request: Request, folder_id: str, body: RenameFolderRequest) -> OperationResult:
    return OperationResult(success=await request.app.state.folder_service.rename_folder(folder_id, body.name))


@router.delete("/folders/{folder_id}")
async def delete_folder(request: Request, folder_id: str) -> OperationResult:
    return OperationResult(success=await request.app.state.folder_service.delete_folder(folder_id))


@router.post("/folders/merge")
async def merge_client_folders(request: Request, body: MergeClientFoldersRequest) -> OperationResult:
    """Merge duplicate folders of one client.

    Raises:
        HTTPException: 400 for an empty client name.
    """
    user_id = await _current_user_id(request)
    try:
        merged = await request.app.state.folder_service.merge_client_folders(body.client_name, user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return OperationResult(success=merged)
