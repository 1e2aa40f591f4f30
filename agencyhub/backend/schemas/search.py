"""
Global Search Schemas.
"""

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    id: str
    title: str
    subtitle: str | None = None


class SearchResponse(BaseModel):
    query: str
    clients: list[SearchHit] = Field(default_factory=list)
    campaigns: list[SearchHit] = Field(default_factory=list)
    tasks: list[SearchHit] = Field(default_factory=list)
    tickets: list[SearchHit] = Field(default_factory=list)
    content_posts: list[SearchHit] = Field(default_factory=list)
    blog_posts: list[SearchHit] = Field(default_factory=list)
