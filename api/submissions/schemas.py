"""
Pydantic schemas for business-submission endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RowId = int | str


class SubmissionFields(BaseModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    description: str | None = None
    # Sanitized in the service: anything that is not a list of strings is dropped.
    categories: Any = None
    new_category: str | None = None
    backlink_url: str | None = None
    logo_url: str | None = None
    friends: Any = None
    similar: Any = None


class SaveSubmissionRequest(SubmissionFields):
    model_config = ConfigDict(populate_by_name=True)

    # Present when an admin edits an existing submission.
    id: RowId | None = None
    status: str | None = None
    categories_to_feature: Any = Field(default=None, alias="categoriesToFeature")
    categories_to_unfeature: Any = Field(default=None, alias="categoriesToUnfeature")


class PublicSubmissionRequest(SubmissionFields):
    pass


class DeleteSubmissionRequest(BaseModel):
    id: RowId | None = None


class UpdateStatusRequest(BaseModel):
    id: RowId | None = None
    status: str | None = None
