"""
Request Model - Framework-neutral view of an incoming auth request.

Web adapters build an AuthRequest from their own request object
(form/query params, the signed-in user) and read flash messages back
out of it when rendering the response.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from local_passport.domain.user import User


class FlashMessages:
    """One-shot messages keyed by category ("error", "info", ...)."""

    def __init__(self):
        self._messages: Dict[str, List[str]] = {}

    def add(self, category: str, message: str):
        self._messages.setdefault(category, []).append(message)

    def get(self, category: str) -> List[str]:
        """Return and clear the messages for a category."""
        return self._messages.pop(category, [])

    def peek(self, category: str) -> List[str]:
        """Return the messages for a category without clearing them."""
        return list(self._messages.get(category, []))

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return len(self) > 0


@dataclass
class AuthRequest:
    """
    An authentication request.

    params holds submitted form/query values; user is the already
    signed-in user, if any.
    """
    params: Dict[str, Any] = field(default_factory=dict)
    user: Optional[User] = None
    flashes: FlashMessages = field(default_factory=FlashMessages)

    def param(self, name: str) -> Optional[str]:
        """Return a parameter, treating blank strings as missing."""
        value = self.params.get(name)
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def flash(self, category: str, message: str):
        self.flashes.add(category, message)
