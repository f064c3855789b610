"""Client lookup over document metadata."""

import re

from shared.models.document import ClientInfo, Document


def _client_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def extract_clients_from_documents(documents: list[Document]) -> list[ClientInfo]:
    """
    Collect the distinct clients referenced by documents, sorted by name.

    Sources: ``client_id`` + ``client_name`` metadata, ``clientName`` metadata
    (id falls back to a slug of the name) and client folders.
    """
    clients: dict[str, ClientInfo] = {}
    for doc in documents:
        metadata = doc.metadata or {}
        if metadata.get("client_id") and metadata.get("client_name"):
            clients[metadata["client_id"]] = ClientInfo(id=metadata["client_id"], name=metadata["client_name"])

        if metadata.get("clientName"):
            name = metadata["clientName"]
            client_id = metadata.get("client_id") or _client_slug(name)
            clients[client_id] = ClientInfo(id=client_id, name=name)

        if doc.is_folder and doc.folder_type == "client":
            clients[doc.id] = ClientInfo(id=doc.id, name=doc.title)

    return sorted(clients.values(), key=lambda client: client.name.lower())


def filter_documents_by_client(documents: list[Document], client_id: str | None = None) -> list[Document]:
    """Documents tagged with the client id, plus the client folder itself. No id returns everything."""
    if not client_id:
        return documents
    return [
        doc for doc in documents
        if (doc.metadata or {}).get("client_id") == client_id or doc.id == client_id
    ]
