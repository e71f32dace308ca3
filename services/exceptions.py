"""
Service-layer exceptions.
"""


class CookingConsoleError(Exception):
    """Base class for cooking console errors."""


class SessionStoreError(CookingConsoleError):
    """A session store read or write failed; the caller may retry."""


class SessionNotFoundError(SessionStoreError):
    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id
