"""
Pydantic schemas for AI extraction endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExtractFromUrlRequest(BaseModel):
    url: str | None = None


class FindTopBusinessesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category_name: str | None = Field(default=None, alias="categoryName")
    city_name: str | None = Field(default=None, alias="cityName")
