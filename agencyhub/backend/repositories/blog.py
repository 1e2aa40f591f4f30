"""
Blog Post Repository.
"""

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.blog import BlogPost
from agencyhub.backend.repositories.base import BaseRepository

PUBLISHED = "published"


class BlogPostRepository(BaseRepository[BlogPost]):
    model = BlogPost

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_published(self, limit: int = 20, offset: int = 0) -> list[BlogPost]:
        return await self.find(
            BlogPost.status == PUBLISHED,
            order_by=[BlogPost.published_at.desc(), BlogPost.created_at.desc()],
            limit=limit,
            offset=offset,
        )

    async def count_published(self) -> int:
        return await self.count(BlogPost.status == PUBLISHED)

    async def list_all(self, limit: int = 20, offset: int = 0) -> list[BlogPost]:
        return await self.find(order_by=BlogPost.updated_at.desc(), limit=limit, offset=offset)

    async def get_published_by_slug(self, slug: str) -> BlogPost | None:
        return await self.find_one(BlogPost.slug == slug, BlogPost.status == PUBLISHED)

    async def slugs_like(self, base: str, exclude_id: str | None = None) -> set[str]:
        """Existing slugs equal to ``base`` or of the form ``base-N``."""
        conditions: list[ColumnElement[bool]] = [
            (BlogPost.slug == base) | BlogPost.slug.like(f"{base}-%")
        ]
        if exclude_id:
            conditions.append(BlogPost.id != exclude_id)
        result = await self.session.execute(select(BlogPost.slug).where(*conditions))
        return set(result.scalars().all())

    async def search(self, query: str, published_only: bool = False, limit: int = 5) -> list[BlogPost]:
        conditions: list[ColumnElement[bool]] = [BlogPost.title.ilike(f"%{query}%")]
        if published_only:
            conditions.append(BlogPost.status == PUBLISHED)
        return await self.find(*conditions, order_by=BlogPost.created_at.desc(), limit=limit)
