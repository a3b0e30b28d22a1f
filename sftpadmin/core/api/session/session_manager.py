"""Session manager for HTTP connections."""
from typing import Optional

import requests

from .session_factory import SessionFactory


class SessionManager:
    """Manages the HTTP session of a client."""
    
    def __init__(self, user_agent: str, session: Optional[requests.Session] = None):
        """Initializes session manager, optionally around a given session."""
        self.user_agent = user_agent
        self._owned = session is None
        self.sync_session = session or SessionFactory.create_sync_session(user_agent)
    
    def get_sync_session(self) -> requests.Session:
        """Gets synchronous session."""
        return self.sync_session
    
    def close(self):
        """Closes the session if this manager created it."""
        if self.sync_session is not None and self._owned:
            self.sync_session.close()
        self.sync_session = None
