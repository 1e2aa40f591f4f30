"""
Database models.

Importing this package registers every table on Base.metadata, which
Alembic autogenerate and the test fixtures rely on.
"""

from agencyhub.backend.models.analytics import AnalyticsMetric
from agencyhub.backend.models.base import Base
from agencyhub.backend.models.blog import BlogPost
from agencyhub.backend.models.campaign import Campaign
from agencyhub.backend.models.client import Client, SocialStat
from agencyhub.backend.models.content import ContentPost
from agencyhub.backend.models.discount import DiscountCode, DiscountRedemption
from agencyhub.backend.models.lead import Lead, LeadActivity
from agencyhub.backend.models.notification import Notification, PushSubscription
from agencyhub.backend.models.onboarding import OnboardingTask
from agencyhub.backend.models.package import SubscriptionPackage
from agencyhub.backend.models.second_me import SecondMeContent, SecondMeRequest
from agencyhub.backend.models.task import Task, TaskComment, TaskSpace
from agencyhub.backend.models.ticket import Ticket
from agencyhub.backend.models.user import User
from agencyhub.backend.models.vault import VaultItem

__all__ = [
    "AnalyticsMetric",
    "Base",
    "BlogPost",
    "Campaign",
    "Client",
    "ContentPost",
    "DiscountCode",
    "DiscountRedemption",
    "Lead",
    "LeadActivity",
    "Notification",
    "OnboardingTask",
    "PushSubscription",
    "SecondMeContent",
    "SecondMeRequest",
    "SocialStat",
    "SubscriptionPackage",
    "Task",
    "TaskComment",
    "TaskSpace",
    "Ticket",
    "User",
    "VaultItem",
]
