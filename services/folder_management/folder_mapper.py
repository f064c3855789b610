"""Turns the flat ``documents`` table into a folder tree."""

from shared.models.document import Document, FolderStructure


def determine_folder_type(folder: Document) -> str:
    """
    Normalize a stored folder type to client, form, financial or general.

    Free-text types like "Income and Expense Sheet" count as financial.
    """
    folder_type = folder.folder_type or ""
    if folder_type == "client":
        return "client"
    if "form" in folder_type or "Form" in folder_type:
        return "form"
    if any(hint in folder_type for hint in ("financial", "Financial", "Income", "Expense")):
        return "financial"
    return "general"


def map_documents_to_folders(documents: list[Document]) -> list[FolderStructure]:
    """Flat list of FolderStructure for every folder document, children left empty."""
    return [
        FolderStructure(
            id=doc.id,
            name=doc.title or "",
            type=determine_folder_type(doc),
            parent_id=doc.parent_folder_id,
            metadata=doc.metadata or {},
        )
        for doc in documents
        if doc.is_folder
    ]


def build_folder_hierarchy(folders: list[FolderStructure]) -> list[FolderStructure]:
    """
    Nest folders under their parents.

    Folders whose parent is unknown become roots. Input folders are copied,
    never modified. Levels are counted from the roots.

    Args:
        folders (list[FolderStructure]): Flat folders, e.g. from map_documents_to_folders.

    Returns:
        list[FolderStructure]: Root folders in input order.
    """
    folder_map: dict[str, FolderStructure] = {
        folder.id: folder.model_copy(update={"children": []}) for folder in folders
    }
    roots: list[FolderStructure] = []
    for folder in folder_map.values():
        parent = folder_map.get(folder.parent_id) if folder.parent_id else None
        if parent is not None and parent is not folder:
            parent.children.append(folder)
        else:
            roots.append(folder)

    # breadth-first so every parent has its level before its children; cycles stay unreachable
    queue = list(roots)
    seen: set[str] = set()
    while queue:
        folder = queue.pop(0)
        seen.add(folder.id)
        for child in folder.children:
            if child.id not in seen:
                child.level = folder.level + 1
                queue.append(child)
    return roots


def build_folder_tree(documents: list[Document]) -> list[FolderStructure]:
    return build_folder_hierarchy(map_documents_to_folders(documents))


def flatten_folder_structure(folders: list[FolderStructure]) -> list[FolderStructure]:
    """Pre-order list of all folders of a tree."""
    result: list[FolderStructure] = []
    for folder in folders:
        result.append(folder)
        if folder.children:
            result.extend(flatten_folder_structure(folder.children))
    return result
