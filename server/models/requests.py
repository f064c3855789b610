from pydantic import BaseModel


class WebhookRequest(BaseModel):
    document_id: str | None = None


class CreateFolderRequest(BaseModel):
    name: str
    folder_type: str = "general"
    parent_id: str | None = None
    client_name: str | None = None


class RenameFolderRequest(BaseModel):
    name: str


class MergeClientFoldersRequest(BaseModel):
    client_name: str
