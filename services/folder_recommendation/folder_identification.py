"""Classification helpers for uncategorized documents.

All functions are pure: no I/O, no exceptions for odd input, inputs are
never modified. The AI analysis payload may be an ``AnalysisPayload``, the
raw ``document_analysis`` row as dict, or None.
"""

from collections import deque

from pydantic import BaseModel

from shared.models.document import Document, FolderStructure, SubfolderMatch

FORM_47 = "form-47"
FORM_76 = "form-76"

FORMS_SUBFOLDER = "Forms"
FINANCIAL_SUBFOLDER = "Financial Sheets"
DOCUMENTS_SUBFOLDER = "Documents"

_FORM_47_TITLE_HINTS = ("form 47", "consumer proposal")
_FORM_76_TITLE_HINTS = ("form 76",)
_FINANCIAL_TITLE_HINTS = ("statement", "sheet", "budget", ".xls")

# subfolder name -> (declared folder type, name fragments)
_SUBFOLDER_RULES: dict[str, tuple[str, tuple[str, ...]]] = {
    FORMS_SUBFOLDER: ("form", ("form",)),
    FINANCIAL_SUBFOLDER: ("financial", ("financial", "sheet")),
    DOCUMENTS_SUBFOLDER: ("general", ("document",)),
}


def _extracted_info(data) -> dict:
    """Return ``content.extracted_info`` of an analysis payload as dict, {} if missing."""
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        data = data.model_dump()
    if not isinstance(data, dict):
        return {}
    content = data.get("content")
    if not isinstance(content, dict):
        return {}
    info = content.get("extracted_info")
    return info if isinstance(info, dict) else {}


def _metadata(doc: Document) -> dict:
    return doc.metadata if isinstance(doc.metadata, dict) else {}


def _title(doc: Document) -> str:
    return (doc.title or "").lower()


def _text_or_none(value) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def is_document_form47(doc: Document, data=None) -> bool:
    """True if metadata, title or AI payload marks the document as Form 47 (consumer proposal)."""
    title = _title(doc)
    return (
        _metadata(doc).get("formType") == FORM_47
        or any(hint in title for hint in _FORM_47_TITLE_HINTS)
        or _extracted_info(data).get("formType") == FORM_47
    )


def is_document_form76(doc: Document, data=None) -> bool:
    """True if metadata, title or AI payload marks the document as Form 76."""
    title = _title(doc)
    return (
        _metadata(doc).get("formType") == FORM_76
        or any(hint in title for hint in _FORM_76_TITLE_HINTS)
        or _extracted_info(data).get("formType") == FORM_76
    )


def is_financial_document(doc: Document) -> bool:
    # plain substring match, "statement of intent.docx" counts as financial
    title = _title(doc)
    return any(hint in title for hint in _FINANCIAL_TITLE_HINTS)


def extract_client_name(doc: Document, data=None) -> str | None:
    """
    Resolve the client a document belongs to.

    Precedence: AI payload ``clientName``, document metadata (``clientName``
    then ``client_name``), AI payload ``consumerDebtorName`` (Form 47 field).

    Returns:
        str | None: The client name, None if no source carries one.
    """
    info = _extracted_info(data)
    metadata = _metadata(doc)
    for candidate in (
        info.get("clientName"),
        metadata.get("clientName"),
        metadata.get("client_name"),
        info.get("consumerDebtorName"),
    ):
        name = _text_or_none(candidate)
        if name:
            return name
    return None


def classify_generic_folder_type(is_form47: bool, is_form76: bool, is_financial: bool) -> str:
    """Folder type announced when a document cannot be tied to a client."""
    if is_form47 or is_form76:
        return "Forms"
    if is_financial:
        return "Financial Documents"
    return "General Documents"


def _wanted_subfolder(is_form47: bool, is_form76: bool, is_financial: bool) -> str:
    if is_form47 or is_form76:
        return FORMS_SUBFOLDER
    if is_financial:
        return FINANCIAL_SUBFOLDER
    return DOCUMENTS_SUBFOLDER


def _matches_subfolder(folder: FolderStructure, subfolder_name: str) -> bool:
    folder_type, fragments = _SUBFOLDER_RULES[subfolder_name]
    name = (folder.name or "").lower()
    return folder.type == folder_type or any(fragment in name for fragment in fragments)


def find_appropriate_subfolder(
    client_folder: FolderStructure,
    is_form47: bool,
    is_form76: bool,
    is_financial: bool,
    max_depth: int = 1,
) -> SubfolderMatch:
    """
    Pick the subfolder of a client folder a document should be filed in.

    Forms go to a "Forms" folder, financial documents to "Financial Sheets",
    everything else to "Documents". A child matches by its declared type or
    by a case-insensitive name fragment.

    Args:
        client_folder (FolderStructure): The client's root folder.
        is_form47 (bool): Document is a Form 47.
        is_form76 (bool): Document is a Form 76.
        is_financial (bool): Document is a financial sheet.
        max_depth (int): How many levels below the client folder are searched.
            1 looks at immediate children only. Deeper levels are searched
            breadth-first, so the shallowest match wins.

    Returns:
        SubfolderMatch: The matching subfolder and its path, or the client folder
            itself plus the name of the subfolder that should be created.
    """
    wanted = _wanted_subfolder(is_form47, is_form76, is_financial)
    queue: deque[tuple[FolderStructure, list[str], int]] = deque(
        (child, [client_folder.name, child.name], 1) for child in client_folder.children or []
    )
    while queue:
        folder, path, depth = queue.popleft()
        if _matches_subfolder(folder, wanted):
            return SubfolderMatch(target_folder_id=folder.id, folder_path=path)
        if depth < max_depth:
            queue.extend((child, path + [child.name], depth + 1) for child in folder.children or [])

    return SubfolderMatch(
        target_folder_id=client_folder.id,
        folder_path=[client_folder.name],
        suggested_subfolder_name=wanted,
    )


def find_client_folder(folders: list[FolderStructure], client_name: str) -> FolderStructure | None:
    """Exact, case-insensitive name match among the given client folders, surrounding whitespace ignored."""
    wanted = client_name.strip().lower()
    return next(
        (f for f in folders if f.type == "client" and (f.name or "").strip().lower() == wanted),
        None,
    )


def is_uncategorized_candidate(doc: Document) -> bool:
    """Not a folder, not filed yet, AI processing finished."""
    return not doc.is_folder and not doc.parent_folder_id and doc.ai_processing_status == "complete"
