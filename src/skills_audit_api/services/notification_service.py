"""Notification service for employee push alerts."""

import logging
from typing import ClassVar, Protocol

import httpx

from skills_audit_api.models.domain.notification import (
    NotificationEvent,
    NotificationMessage,
    WorkflowEvent,
)
from skills_audit_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

# Push gateway constants
PUSH_TIMEOUT = 10.0
TOPIC_PREFIX = "employee_"

# User-Agent per RFC 7231
USER_AGENT = "SkillsAuditSystem/1.0"


def build_notification(event: WorkflowEvent) -> NotificationMessage:
    """Map a workflow event to the notification sent for it.

    Args:
        event: Workflow event

    Returns:
        NotificationMessage addressed to the event's recipient
    """
    data = {"type": event.kind.value}

    if event.kind == NotificationEvent.QUALIFICATION_APPROVED:
        title = "Qualification Approved"
        body = f"Your {event.subject} has been approved by HR."
        data["qualificationName"] = event.subject
    elif event.kind == NotificationEvent.QUALIFICATION_REJECTED:
        title = "Qualification Update"
        body = f"Your {event.subject} requires additional review. Please check details."
        data["qualificationName"] = event.subject
        data["reason"] = event.reason or ""
    elif event.kind == NotificationEvent.TRAINING_SUGGESTED:
        title = "New Training Suggested"
        body = f"HR has suggested a new training: {event.subject}"
        data["trainingName"] = event.subject
    else:
        title = "Profile Updated"
        body = event.message or "Your profile has been updated by HR."

    return NotificationMessage(
        recipient_external_id=event.recipient_external_id,
        title=title,
        body=body,
        data=data,
    )


class PushTransport(Protocol):
    """Delivers a notification to one employee."""

    async def send(
        self,
        recipient_external_id: str,
        title: str,
        body: str,
        data: dict[str, str],
    ) -> bool:
        """Send a notification. Returns True if the gateway accepted it."""
        ...


class HttpPushTransport:
    """Push transport posting topic messages to an HTTP push gateway.

    Each employee subscribes to the topic ``employee_<external_id>``. A send
    is attempted once; failures are reported, never retried.
    """

    # Shared HTTP client for connection reuse (class-level)
    _http_client: ClassVar[httpx.AsyncClient | None] = None

    def __init__(
        self,
        gateway_url: str | None,
        token: str = "",
        timeout: float = PUSH_TIMEOUT,
    ) -> None:
        """Initialize transport with gateway endpoint and credentials."""
        self.gateway_url = gateway_url
        self.token = token
        self.timeout = timeout

    @classmethod
    def _get_http_client(cls, timeout: float) -> httpx.AsyncClient:
        """Get or create shared HTTP client with connection pooling.

        Returns:
            Shared httpx.AsyncClient instance
        """
        if cls._http_client is None or cls._http_client.is_closed:
            cls._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                headers={"User-Agent": USER_AGENT},
            )
        return cls._http_client

    @classmethod
    async def close_client(cls) -> None:
        """Close the shared HTTP client. Call on application shutdown."""
        if cls._http_client and not cls._http_client.is_closed:
            await cls._http_client.aclose()
            cls._http_client = None

    async def send(
        self,
        recipient_external_id: str,
        title: str,
        body: str,
        data: dict[str, str],
    ) -> bool:
        """Post a topic message to the push gateway.

        Args:
            recipient_external_id: Identity reference of the recipient
            title: Notification title
            body: Notification body
            data: Structured payload for the client app

        Returns:
            True if the gateway accepted the message
        """
        if not self.gateway_url:
            logger.debug("Push gateway not configured, skipping notification")
            return False

        client = self._get_http_client(self.timeout)
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}

        try:
            response = await client.post(
                self.gateway_url,
                headers=headers,
                json={
                    "message": {
                        "topic": f"{TOPIC_PREFIX}{recipient_external_id}",
                        "notification": {"title": title, "body": body},
                        "data": data,
                    }
                },
            )
        except httpx.TimeoutException:
            logger.error("Push gateway request timed out")
            return False
        except httpx.HTTPError as e:
            log_error(logger, "HTTP error sending push notification", e)
            return False

        if response.is_success:
            return True

        logger.error(f"Push gateway rejected notification: HTTP {response.status_code}")
        return False


class NotificationService:
    """Service turning workflow events into best-effort push notifications."""

    def __init__(self, transport: PushTransport) -> None:
        """Initialize service with a push transport."""
        self.transport = transport

    async def dispatch(self, event: WorkflowEvent) -> bool:
        """Send the notification for a workflow event.

        Delivery failures are logged and reported, never raised, so callers
        can treat dispatch as fire-and-forget.

        Args:
            event: Workflow event

        Returns:
            True if the transport accepted the notification
        """
        message = build_notification(event)
        try:
            sent = await self.transport.send(
                message.recipient_external_id,
                message.title,
                message.body,
                message.data,
            )
        except Exception as e:
            log_error(logger, f"Failed to dispatch {event.kind.value} notification", e)
            return False

        if sent:
            logger.info(f"Notification {event.kind.value} sent")
        else:
            logger.warning(f"Notification {event.kind.value} was not delivered")
        return sent

    async def notify_qualification_approved(
        self,
        employee_external_id: str,
        qualification_name: str,
    ) -> bool:
        """Send notification for an approved qualification."""
        return await self.dispatch(
            WorkflowEvent(
                kind=NotificationEvent.QUALIFICATION_APPROVED,
                recipient_external_id=employee_external_id,
                subject=qualification_name,
            )
        )

    async def notify_qualification_rejected(
        self,
        employee_external_id: str,
        qualification_name: str,
        reason: str,
    ) -> bool:
        """Send notification for a rejected qualification, including the reason."""
        return await self.dispatch(
            WorkflowEvent(
                kind=NotificationEvent.QUALIFICATION_REJECTED,
                recipient_external_id=employee_external_id,
                subject=qualification_name,
                reason=reason,
            )
        )

    async def notify_training_suggested(
        self,
        employee_external_id: str,
        training_name: str,
    ) -> bool:
        """Send notification for a suggested training."""
        return await self.dispatch(
            WorkflowEvent(
                kind=NotificationEvent.TRAINING_SUGGESTED,
                recipient_external_id=employee_external_id,
                subject=training_name,
            )
        )

    async def notify_profile_updated(
        self,
        employee_external_id: str,
        message: str = "Your profile has been updated by HR.",
    ) -> bool:
        """Send notification after an administrator edits a profile."""
        return await self.dispatch(
            WorkflowEvent(
                kind=NotificationEvent.PROFILE_UPDATED,
                recipient_external_id=employee_external_id,
                message=message,
            )
        )
