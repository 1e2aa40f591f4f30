"""
Web Push Service.

Delivers Web Push messages to stored browser subscriptions with pywebpush.
pywebpush is blocking, so each delivery runs on the shared I/O thread pool
behind a circuit breaker. A 404 or 410 from the push service means the
subscription is gone and it is deleted. Other failures are logged and
counted; they never propagate to the caller.
"""

import asyncio
import json
from functools import partial
from typing import Any

import aiobreaker
from pywebpush import WebPushException, webpush
from sqlalchemy.ext.asyncio import AsyncSession

from agencyhub.backend.core.concurrency import get_io_pool, get_semaphore
from agencyhub.backend.core.config import get_app_config, get_settings
from agencyhub.backend.core.exceptions import ServiceUnavailableError
from agencyhub.backend.core.logging import log_with_source
from agencyhub.backend.core.resilience import create_circuit_breaker
from agencyhub.backend.core.utils import utc_now
from agencyhub.backend.models.notification import PushSubscription
from agencyhub.backend.models.user import User
from agencyhub.backend.repositories.notification import PushSubscriptionRepository
from agencyhub.backend.repositories.user import UserRepository
from agencyhub.backend.schemas.push import PushDeliveryResult, PushSendRequest, PushSubscribeRequest
from agencyhub.backend.services.base import BaseService

GONE_STATUSES = frozenset({404, 410})

_breaker: aiobreaker.CircuitBreaker | None = None


class SubscriptionGone(Exception):
    """The push service reported the subscription as expired."""


def get_push_breaker() -> aiobreaker.CircuitBreaker:
    global _breaker
    if _breaker is None:
        config = get_app_config().notifications.push.circuit_breaker
        _breaker = create_circuit_breaker(
            "web_push",
            fail_max=config.fail_max,
            timeout_duration=config.timeout_duration,
            exclude=[SubscriptionGone],
        )
    return _breaker


def vapid_configured() -> bool:
    settings = get_settings()
    return bool(settings.vapid_public_key and settings.vapid_private_key)


def build_payload(title: str, body: str, url: str | None = None) -> dict[str, Any]:
    """Notification JSON understood by the service worker."""
    push_config = get_app_config().notifications.push
    return {
        "title": title,
        "body": body,
        "icon": push_config.icon,
        "badge": push_config.badge,
        "url": url or push_config.default_url,
        "timestamp": int(utc_now().timestamp() * 1000),
    }


def _send_blocking(subscription_info: dict[str, Any], data: str) -> None:
    settings = get_settings()
    app_config = get_app_config()
    push_config = app_config.notifications.push
    try:
        webpush(
            subscription_info=subscription_info,
            data=data,
            vapid_private_key=settings.vapid_private_key,
            vapid_claims={"sub": push_config.subject},
            ttl=push_config.ttl_seconds,
            timeout=float(app_config.application.timeouts.external_api),
        )
    except WebPushException as e:
        status = getattr(e.response, "status_code", None)
        if status in GONE_STATUSES:
            raise SubscriptionGone(str(status)) from e
        raise


class PushService(BaseService):
    """Subscription management and delivery."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = PushSubscriptionRepository(session)
        self.user_repo = UserRepository(session)

    @staticmethod
    def public_key() -> str:
        """
        VAPID public key for the browser's pushManager.subscribe().

        Raises:
            ServiceUnavailableError: If VAPID keys are not configured
        """
        if not vapid_configured():
            raise ServiceUnavailableError("Push notifications are not configured")
        return get_settings().vapid_public_key

    async def subscribe(self, user: User, data: PushSubscribeRequest) -> PushSubscription:
        """Store the subscription, re-assigning the endpoint if it already exists."""
        existing = await self.repo.get_by_endpoint(data.endpoint)
        self._log_operation("Saving push subscription", user_id=user.id, created=existing is None)
        if existing is not None:
            return await self._execute_db_operation(
                "update_push_subscription",
                self.repo.apply(
                    existing,
                    user_id=user.id,
                    p256dh=data.keys.p256dh,
                    auth=data.keys.auth,
                ),
            )
        return await self._execute_db_operation(
            "create_push_subscription",
            self.repo.create(
                user_id=user.id,
                endpoint=data.endpoint,
                p256dh=data.keys.p256dh,
                auth=data.keys.auth,
            ),
        )

    async def unsubscribe(self, user: User, endpoint: str) -> bool:
        removed = await self._execute_db_operation(
            "delete_push_subscription",
            self.repo.delete_by_endpoint(endpoint, user_id=user.id),
        )
        self._log_operation("Removed push subscription", user_id=user.id, removed=removed)
        return removed > 0

    async def send(self, data: PushSendRequest) -> PushDeliveryResult:
        """Admin send to one user, a role, or every subscribed user."""
        if data.user_id:
            user_ids = [data.user_id]
        elif data.role:
            user_ids = [u.id for u in await self.user_repo.get_by_roles([data.role.value])]
        else:
            user_ids = await self.repo.subscribed_user_ids()

        self._log_operation(
            "Sending push",
            target_users=len(user_ids),
            role=data.role.value if data.role else None,
        )
        return await self.send_to_users(user_ids, data.title, data.body, data.url)

    async def send_to_users(
        self,
        user_ids: list[str],
        title: str,
        body: str,
        url: str | None = None,
    ) -> PushDeliveryResult:
        result = PushDeliveryResult()
        if not get_app_config().features.push_notifications_enabled:
            self._log_debug("Push disabled by feature flag")
            return result
        if not vapid_configured():
            self._logger.warning("VAPID keys not configured, skipping push delivery")
            return result

        subscriptions = await self.repo.get_for_users(user_ids)
        if not subscriptions:
            return result

        data = json.dumps(build_payload(title, body, url))
        outcomes = await asyncio.gather(*(self._deliver(sub, data) for sub in subscriptions))

        gone: list[str] = []
        for subscription, outcome in zip(subscriptions, outcomes):
            if outcome == "sent":
                result.sent += 1
            elif outcome == "gone":
                gone.append(subscription.id)
            else:
                result.failed += 1

        if gone:
            await self._execute_db_operation("prune_push_subscriptions", self.repo.delete_by_ids(gone))
            result.removed = len(gone)

        log_with_source(
            self._logger,
            "push",
            "info",
            "Push delivery finished",
            sent=result.sent,
            failed=result.failed,
            removed=result.removed,
        )
        return result

    async def _deliver(self, subscription: PushSubscription, data: str) -> str:
        subscription_info = {
            "endpoint": subscription.endpoint,
            "keys": {"p256dh": subscription.p256dh, "auth": subscription.auth},
        }
        loop = asyncio.get_running_loop()

        async def _call() -> None:
            await loop.run_in_executor(
                get_io_pool(),
                partial(_send_blocking, subscription_info, data),
            )

        try:
            async with get_semaphore("external_api"):
                await get_push_breaker().call_async(_call)
        except SubscriptionGone:
            self._log_debug("Push subscription expired", subscription_id=subscription.id)
            return "gone"
        except aiobreaker.CircuitBreakerError:
            self._logger.warning(
                "Push circuit open, delivery skipped",
                extra={"subscription_id": subscription.id},
            )
            return "failed"
        except Exception as e:
            self._logger.warning(
                "Push delivery failed",
                extra={"subscription_id": subscription.id, "error": str(e)},
            )
            return "failed"
        return "sent"
