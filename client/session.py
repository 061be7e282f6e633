"""Explicit session state for the Potluck API client."""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class ClientSession:
    """
    Connection settings and organizer credentials for one API consumer.

    Passed to every client call instead of living in module globals; the
    client replaces ``token`` when it re-authenticates.
    """

    base_url: str
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    timeout: float = 15.0

    @property
    def can_login(self) -> bool:
        return bool(self.username and self.password)

    @property
    def api_base(self) -> str:
        return self.base_url.rstrip("/")

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def clear_token(self) -> None:
        self.token = None
