"""
Blog Service.

Blog CMS: slug generation, tag normalisation and publishing.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.exceptions import NotFoundError
from agencyhub.backend.core.utils import slugify, utc_now
from agencyhub.backend.models.blog import BlogPost
from agencyhub.backend.repositories.blog import BlogPostRepository
from agencyhub.backend.schemas.blog import BlogPostCreate, BlogPostUpdate
from agencyhub.backend.services.base import BaseService

FALLBACK_SLUG = "post"


def base_slug(value: str) -> str:
    return slugify(value) or FALLBACK_SLUG


def first_free_slug(base: str, taken: set[str]) -> str:
    """``base``, else ``base-2``, ``base-3``... whichever is not taken."""
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


class BlogService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = BlogPostRepository(session)

    async def unique_slug(self, source: str, exclude_id: str | None = None) -> str:
        base = base_slug(source)
        taken = await self.repo.slugs_like(base, exclude_id=exclude_id)
        return first_free_slug(base, taken)

    # Public

    async def list_published(self, limit: int = 20, offset: int = 0) -> tuple[list[BlogPost], int]:
        posts = await self.repo.list_published(limit=limit, offset=offset)
        return posts, await self.repo.count_published()

    async def get_published(self, slug: str) -> BlogPost:
        post = await self.repo.get_published_by_slug(slug)
        if post is None:
            raise NotFoundError("Blog post not found")
        return post

    # Admin

    async def list_all(self, limit: int = 20, offset: int = 0) -> tuple[list[BlogPost], int]:
        posts = await self.repo.list_all(limit=limit, offset=offset)
        return posts, await self.repo.count()

    async def create_post(self, data: BlogPostCreate) -> BlogPost:
        values = data.model_dump()
        values["slug"] = await self.unique_slug(data.slug or data.title)
        if values["status"] == "published" and values["published_at"] is None:
            values["published_at"] = utc_now()

        self._log_operation("Creating blog post", slug=values["slug"], status=values["status"])
        return await self._execute_db_operation(
            "create_blog_post",
            self.repo.create(**values),
        )

    async def update_post(self, post_id: str, data: BlogPostUpdate) -> BlogPost:
        post = await self.repo.get_by_id(post_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return post

        slug_source = update_data.pop("slug", None) or update_data.get("title")
        if slug_source:
            update_data["slug"] = await self.unique_slug(slug_source, exclude_id=post.id)

        status = update_data.get("status", post.status)
        published_at = update_data.get("published_at", post.published_at)
        if status == "published" and published_at is None:
            update_data["published_at"] = utc_now()

        self._log_operation("Updating blog post", post_id=post_id, fields=list(update_data))
        return await self._execute_db_operation(
            "update_blog_post",
            self.repo.apply(post, **update_data),
        )

    async def delete_post(self, post_id: str) -> None:
        self._log_operation("Deleting blog post", post_id=post_id)
        await self._execute_db_operation("delete_blog_post", self.repo.delete(post_id))
