"""
Pydantic schemas for category-page endpoints.

Fields are optional here; required-field checks happen in the service so
that every missing field produces the same 400 message.
"""

from __future__ import annotations

from pydantic import BaseModel

RowId = int | str


class CategoryFields(BaseModel):
    page_title: str | None = None
    category_name: str | None = None
    slug: str | None = None
    description: str | None = None
    icon_name: str | None = None
    featured_business_1_id: RowId | None = None
    featured_business_2_id: RowId | None = None
    featured_business_3_id: RowId | None = None


class CreateCategoryRequest(CategoryFields):
    pass


class UpdateCategoryRequest(CategoryFields):
    id: RowId | None = None


class CreateFromSubmissionRequest(BaseModel):
    new_category: str | None = None


class DeleteCategoryRequest(BaseModel):
    id: RowId | None = None
