"""
ntfy.sh notifier - free push notifications, no signup required
https://ntfy.sh
"""

from typing import Optional

import httpx

from jobtracker.notifier.base_notifier import BaseNotifier, Notification, NotificationPriority
from jobtracker.utils.logger import logger


class NtfyNotifier(BaseNotifier):
    """
    Send notifications via ntfy.sh.

    Usage:
    1. Pick a unique topic name (random string recommended)
    2. Set NTFY_TOPIC in .env
    3. Subscribe to your topic at https://ntfy.sh/YOUR_TOPIC or in the ntfy app
    """

    SERVICE_NAME = "ntfy.sh"
    BASE_URL = "https://ntfy.sh"

    def __init__(self, topic: Optional[str] = None, client: Optional[httpx.Client] = None):
        if topic is None:
            from jobtracker.utils.config import get_settings
            topic = get_settings().ntfy_topic
        self.topic = topic

        if not self.topic:
            raise ValueError(
                "ntfy topic not set. Add NTFY_TOPIC to .env file.\n"
                "Pick a unique name like: jobtracker-yourname-12345"
            )
        self._client = client

    def _priority_to_ntfy(self, priority: NotificationPriority) -> int:
        """Convert our priority to ntfy priority (1-5)"""
        mapping = {
            NotificationPriority.LOW: 2,
            NotificationPriority.NORMAL: 3,
            NotificationPriority.HIGH: 4,
        }
        return mapping.get(priority, 3)

    def send(self, notification: Notification) -> bool:
        """Send notification via ntfy.sh"""
        headers = {
            "Title": notification.title,
            "Priority": str(self._priority_to_ntfy(notification.priority)),
            "Tags": ",".join(notification.tags),
        }
        if notification.url:
            headers["Click"] = notification.url

        try:
            if self._client is not None:
                response = self._post(self._client, notification, headers)
            else:
                with httpx.Client() as client:
                    response = self._post(client, notification, headers)
        except httpx.HTTPError as e:
            logger.error(f"ntfy notification failed: {e}")
            return False

        if response.status_code != 200:
            logger.warning(f"ntfy returned {response.status_code} for {notification.title!r}")
            return False
        return True

    def _post(self, client: httpx.Client, notification: Notification, headers: dict) -> httpx.Response:
        return client.post(
            f"{self.BASE_URL}/{self.topic}",
            content=notification.message.encode("utf-8"),
            headers=headers,
            timeout=10,
        )

    def get_subscribe_url(self) -> str:
        """Get the URL to subscribe to notifications"""
        return f"{self.BASE_URL}/{self.topic}"
