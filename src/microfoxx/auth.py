"""
Session manager: login against the service and hold the resulting session.

Sessions expire 5 minutes after they were last used. Nothing here renews
them; callers refresh when a request is rejected and resend themselves.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from microfoxx.errors import AuthError, MicroFoxxError
from microfoxx.models.session import SessionInfo
from microfoxx.transport.envelope import SUCCESS_CODES, classify, decode_object
from microfoxx.transport.http import HttpClient

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = "/login"


class SessionManager:
    def __init__(self, http: HttpClient):
        self._http = http

    @property
    def session(self) -> Optional[SessionInfo]:
        return self._http.session

    async def establish(self, username: str, password: str) -> SessionInfo:
        """Log in and make the new session current for every later request."""
        try:
            resp = await self._http.call(
                "POST", LOGIN_ENDPOINT,
                body={"username": username, "password": password},
                authenticated=False,
            )
        except MicroFoxxError as e:
            raise AuthError(f"Failed to establish session: {e}", details={"cause": e})

        if resp.status_code not in SUCCESS_CODES:
            message, error = classify(resp.status_code, resp.content)
            raise AuthError(
                f"Login rejected with HTTP {resp.status_code}: {message or error.message}",
                details={"cause": error, "status_code": resp.status_code},
            )

        try:
            session = SessionInfo.model_validate(decode_object(resp.content))
        except MicroFoxxError as e:
            raise AuthError(f"Failed to decode session: {e}", details={"cause": e})
        except ValidationError as e:
            raise AuthError(f"Failed to decode session: {e.error_count()} invalid field(s)", details={"cause": e})

        self._http.set_session(session)
        logger.debug("Session established for user %s", session.user_id)
        return session

    async def refresh(self, username: str, password: str) -> SessionInfo:
        """Replace the current session with a new one."""
        return await self.establish(username, password)
