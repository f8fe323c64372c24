"""
Uploaded documents, such as dispute evidence.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Union

from ..core.client import ApiClient, RequestDescriptor
from ..core.codec import expect_entity, parse_timestamp
from ..core.ids import DocumentId

__all__ = ["Document", "DocumentMimeType", "DocumentPurpose", "DocumentsAPI"]


class DocumentPurpose(str, Enum):
    DISPUTE_EVIDENCE = "dispute_evidence"


class DocumentMimeType(str, Enum):
    IMAGE_JPG = "image/jpg"
    IMAGE_JPEG = "image/jpeg"
    IMAGE_PNG = "image/png"
    APPLICATION_PDF = "application/pdf"


@dataclass(frozen=True)
class Document:
    id: DocumentId
    purpose: DocumentPurpose
    name: str
    size: int
    mime_type: DocumentMimeType
    created_at: datetime

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Document":
        expect_entity(payload, "document")
        return cls(
            id=DocumentId(payload["id"]),
            purpose=DocumentPurpose(payload["purpose"]),
            name=payload["name"],
            size=int(payload["size"]),
            mime_type=DocumentMimeType(payload["mime_type"]),
            created_at=parse_timestamp(payload["created_at"]),
        )


class DocumentsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def fetch(self, document_id: Union[DocumentId, str]) -> Document:
        document_id = DocumentId.parse(document_id)
        return self._api.get(
            RequestDescriptor(f"/documents/{document_id}"),
            Document.from_response,
        )
