"""
Issue document model.

A Document is the engine's view of a ticket as supplied by the fetch/search
collaborator. It is immutable once constructed; missing text fields are
coerced to empty strings so that they simply produce no signal.
"""

from datetime import datetime
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field, field_validator


class Document(BaseModel):
    """
    A single issue record, query or candidate.
    """

    model_config = {"frozen": True}

    id: str = Field(description="Issue identifier, e.g. 'PROJ-123'")
    summary: str = Field(default="", description="One-line issue title")
    description: str = Field(default="", description="Free-text issue body")
    reporter: Optional[str] = Field(default=None, description="Reporter account identifier")
    labels: FrozenSet[str] = Field(default_factory=frozenset, description="Issue labels")
    components: FrozenSet[str] = Field(
        default_factory=frozenset, description="Component identifiers"
    )
    issue_type: Optional[str] = Field(default=None, description="Issue type, e.g. 'Bug'")
    status_category: Optional[str] = Field(
        default=None, description="Status category, e.g. 'Done' or 'In Progress'"
    )
    created: Optional[datetime] = Field(default=None, description="Creation timestamp")

    @field_validator("summary", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("labels", "components", mode="before")
    @classmethod
    def _none_to_empty_set(cls, value):
        return frozenset() if value is None else value
