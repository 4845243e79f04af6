from __future__ import annotations

from typing import Any, ClassVar, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict


TModel = TypeVar("TModel", bound="DocumentModel")


class DocumentModel(BaseModel):
    """
    Base Pydantic model for entities read from the document store.

    Documents arrive as untyped field maps. Each subclass declares its
    defaulting rules through field defaults and ``mode="before"`` validators,
    so the "default if missing" policy for an entity lives in exactly one
    place and `from_document` never rejects a document because of a
    malformed field.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Logical collection name; subclasses should override
    collection_name: ClassVar[str]

    id: Optional[str] = None

    @classmethod
    def from_document(
        cls: Type[TModel], document_id: Optional[str], data: Optional[Mapping[str, Any]]
    ) -> TModel:
        """
        Decode a raw field map into a typed record.

        The document id is authoritative; an ``id`` field inside the map is
        ignored.
        """
        fields = dict(data or {})
        fields.pop("id", None)
        return cls.model_validate({**fields, "id": document_id})
