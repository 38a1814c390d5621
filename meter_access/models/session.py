"""
Per-request session.

Not persisted here: the token cookie is the only persistence and it is
owned by the browser.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .responses import User


class Session(BaseModel):
    """A present user means the token was accepted when the request began."""

    model_config = ConfigDict(frozen=True)

    token: Optional[str] = None
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None


ANONYMOUS = Session()
