"""Account-changed notifications."""

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountChanged:
    """Something about an account changed; views showing it should refresh."""

    account_id: int


Subscriber = Callable[[AccountChanged], None]


class EventBus:
    """Synchronous publish/subscribe channel for AccountChanged events.

    Publishing is fire and forget: a failing subscriber is logged and does
    not stop delivery to the others or reach the publisher.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber. Returns a function that unsubscribes it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, event: AccountChanged) -> None:
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                logger.exception("Subscriber %r failed handling %r", subscriber, event)
