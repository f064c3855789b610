from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CardAction(BaseModel):
    label: str
    endpoint: str


class RecommendationCard(BaseModel):
    """What the recommendation panel shows for the active recommendation. Serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    document_id: str
    suggested_folder_id: str
    document_title: str
    folder_path: list[str]
    path_label: str
    actions: list[CardAction]


class InactiveRecommendation(BaseModel):
    active: bool = False


class MoveResult(BaseModel):
    moved: bool


class FolderCreated(BaseModel):
    id: str | None
    created: bool


class OperationResult(BaseModel):
    success: bool
