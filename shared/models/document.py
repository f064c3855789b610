"""Pydantic models for documents, folders and recommendations.

Hierarchy:
  Document            : a row of the backend ``documents`` table; folders are documents too.
  FolderStructure     : tree-shaped projection of folder documents.
  AnalysisPayload     : AI extraction stored in ``document_analysis``.
  SubfolderMatch      : where inside a client folder a document should go.
  FolderRecommendation: the single active suggestion held by the watcher.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A stored document or folder. Unknown backend columns are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    is_folder: bool = False
    folder_type: str | None = None
    parent_folder_id: str | None = None
    metadata: dict = Field(default_factory=dict)
    ai_processing_status: str | None = None
    user_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class FolderStructure(BaseModel):
    """A folder with its sub folders. ``type`` is one of client, form, financial, general."""

    id: str
    name: str
    type: str = "general"
    parent_id: str | None = None
    level: int = 0
    metadata: dict = Field(default_factory=dict)
    children: list[FolderStructure] = Field(default_factory=list)


class ExtractedInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    clientName: str | None = None
    consumerDebtorName: str | None = None
    formType: str | None = None


class AnalysisContent(BaseModel):
    model_config = ConfigDict(extra="allow")

    extracted_info: ExtractedInfo | None = None


class AnalysisPayload(BaseModel):
    """Row of ``document_analysis`` as returned by the store (only ``content`` is selected)."""

    model_config = ConfigDict(extra="allow")

    content: AnalysisContent | None = None


class SubfolderMatch(BaseModel):
    """
    Target inside a client folder.

    When no fitting subfolder exists, ``target_folder_id`` is the client folder
    itself and ``suggested_subfolder_name`` names the subfolder that should be created.
    """

    target_folder_id: str
    folder_path: list[str]
    suggested_subfolder_name: str | None = None


class FolderRecommendation(BaseModel):
    """Suggestion to move one document into one folder."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: str = Field(alias="documentId")
    suggested_folder_id: str = Field(alias="suggestedFolderId")
    document_title: str = Field(alias="documentTitle")
    folder_path: list[str] = Field(alias="folderPath")


class CurrentUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None


class ClientInfo(BaseModel):
    id: str
    name: str


FolderStructure.model_rebuild()
