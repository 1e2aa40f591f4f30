"""
Search Service.

Case-insensitive containment search across the main record types, capped
per group and scoped to the caller's tenant.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.blog import BlogPostRepository
from agencyhub.backend.repositories.campaign import CampaignRepository
from agencyhub.backend.repositories.client import ClientRepository
from agencyhub.backend.repositories.content import ContentPostRepository
from agencyhub.backend.repositories.task import TaskRepository
from agencyhub.backend.repositories.ticket import TicketRepository
from agencyhub.backend.schemas.search import SearchHit, SearchResponse
from agencyhub.backend.services.base import BaseService

MIN_QUERY_LENGTH = 2
GROUP_LIMIT = 5


class SearchService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.clients = ClientRepository(session)
        self.campaigns = CampaignRepository(session)
        self.tasks = TaskRepository(session)
        self.tickets = TicketRepository(session)
        self.content = ContentPostRepository(session)
        self.blog = BlogPostRepository(session)

    async def search(self, query: str, user: User) -> SearchResponse:
        term = (query or "").strip()
        if len(term) < MIN_QUERY_LENGTH:
            return SearchResponse(query=term)

        scope = self._client_scope(user)
        self._log_debug("Global search", query=term, scoped=scope is not None)

        clients = await self.clients.search(term, client_id=scope, limit=GROUP_LIMIT)
        campaigns = await self.campaigns.search(term, client_id=scope, limit=GROUP_LIMIT)
        tasks = await self.tasks.search(term, client_id=scope, limit=GROUP_LIMIT)
        tickets = await self.tickets.search(
            term,
            created_by=user.id if scope is not None else None,
            limit=GROUP_LIMIT,
        )
        posts = await self.content.search(term, client_id=scope, limit=GROUP_LIMIT)
        blog_posts = await self.blog.search(term, published_only=scope is not None, limit=GROUP_LIMIT)

        return SearchResponse(
            query=term,
            clients=[SearchHit(id=c.id, title=c.name, subtitle=c.company) for c in clients],
            campaigns=[SearchHit(id=c.id, title=c.name, subtitle=c.status) for c in campaigns],
            tasks=[SearchHit(id=t.id, title=t.title, subtitle=t.status) for t in tasks],
            tickets=[SearchHit(id=t.id, title=t.subject, subtitle=t.status) for t in tickets],
            content_posts=[
                SearchHit(id=p.id, title=p.title, subtitle=p.approval_status) for p in posts
            ],
            blog_posts=[SearchHit(id=b.id, title=b.title, subtitle=b.slug) for b in blog_posts],
        )
