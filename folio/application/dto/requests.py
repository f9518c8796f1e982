"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from folio.core.entities import SearchCategory


class SearchRequest(BaseModel):
    """Request for ranked content search.

    Query string values are coerced to their field types.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    query: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Search query text (trimmed)",
        examples=["react", "design systems"],
    )
    category: SearchCategory = Field(
        default=SearchCategory.ALL,
        description="Restrict results to one content category",
    )
    page: int = Field(
        default=1,
        gt=0,
        description="1-based page number",
    )
    limit: int = Field(
        default=20,
        gt=0,
        le=50,
        description="Results per page",
    )


class TrackClickRequest(BaseModel):
    """Request recording that a search result was opened."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    query: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Query the result was found with",
    )
    clicked_result: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Title or URL of the opened result",
        examples=["/projects/portfolio-site"],
    )
    result_type: Literal["project", "blog", "image", "tag"] | None = Field(
        default=None,
        description="Category of the opened result",
    )
    result_id: str | None = Field(
        default=None,
        description="ID of the opened result",
    )
