"""Session state notifications.

Routes publish a transition whenever a user signs up, logs in, finishes
onboarding or logs out. Anything interested (logging, caches, push channels)
subscribes with a callback and gets back a function that unsubscribes it.
One `SessionEvents` instance is created per app and handed to routes via
`get_session_events`.
"""

import logging
import threading
from enum import Enum
from typing import Callable

from fastapi import Request

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    signed_out = "signed_out"
    signed_in_pending_profile = "signed_in_pending_profile"
    signed_in_onboarded = "signed_in_onboarded"


def state_for(user) -> SessionState:
    if user is None:
        return SessionState.signed_out
    if user.onboarded:
        return SessionState.signed_in_onboarded
    return SessionState.signed_in_pending_profile


SessionCallback = Callable[[int, SessionState], None]


class SessionEvents:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: list[SessionCallback] = []

    def subscribe(self, callback: SessionCallback) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, user_id: int, state: SessionState) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(user_id, state)
            except Exception:
                logger.exception("Session subscriber failed for user %s (%s)", user_id, state.value)


def get_session_events(request: Request) -> SessionEvents:
    return request.app.state.session_events
