"""
API Router.

Aggregates the resource routers. Mounted by main.py under
``application.api_prefix``.
"""

from fastapi import APIRouter

from agencyhub.backend.api.endpoints import (
    analytics,
    auth,
    blog,
    campaigns,
    clients,
    content_posts,
    dashboard,
    discounts,
    leads,
    notifications,
    onboarding,
    packages,
    push,
    search,
    second_me,
    task_spaces,
    tasks,
    tickets,
    users,
    vault,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(leads.router, prefix="/leads", tags=["leads"])
router.include_router(onboarding.router, prefix="/onboarding", tags=["onboarding"])
router.include_router(campaigns.router, prefix="/campaigns", tags=["campaigns"])
router.include_router(task_spaces.router, prefix="/task-spaces", tags=["task-spaces"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(tickets.router, prefix="/tickets", tags=["tickets"])
router.include_router(content_posts.router, prefix="/content-posts", tags=["content"])
router.include_router(blog.router, prefix="/blog-posts", tags=["blog"])
router.include_router(blog.admin_router, prefix="/admin/blog-posts", tags=["blog"])
router.include_router(vault.router, prefix="/vault", tags=["vault"])
router.include_router(discounts.router, prefix="/discounts", tags=["discounts"])
router.include_router(push.router, prefix="/push", tags=["push"])
router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
router.include_router(second_me.router, prefix="/second-me", tags=["second-me"])
router.include_router(packages.router, prefix="/packages", tags=["packages"])
router.include_router(search.router, prefix="/search", tags=["search"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
