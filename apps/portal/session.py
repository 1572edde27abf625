"""Portal - Session State.

Store for the signed-in identity. Every view reads it through ``current()``;
login, logout and role changes are announced with the ``session_changed``
signal, sent by the ``SessionState`` instance that changed.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

import django.dispatch

logger = logging.getLogger('apps.portal')

session_changed = django.dispatch.Signal()


@dataclass(frozen=True)
class Session:
    token: Optional[str] = None
    user_id: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user_id)


class SessionState:

    def __init__(self, session: Optional[Session] = None):
        self._session = session or Session()

    def current(self) -> Session:
        return self._session

    def login(self, token: str, user_id, role: Optional[str]) -> Session:
        return self._publish(Session(token=token, user_id=str(user_id), role=role))

    def logout(self) -> Session:
        return self._publish(Session())

    def set_role(self, role: Optional[str]) -> Session:
        if role == self._session.role:
            return self._session
        return self._publish(replace(self._session, role=role))

    def _publish(self, session: Session) -> Session:
        self._session = session
        session_changed.send(sender=self, session=session)
        logger.debug(f"Session changed: user={session.user_id} role={session.role}")
        return session
