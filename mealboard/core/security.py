"""
Identity checks consumed by the voting and menu-authoring services.

Credential verification happens upstream; by the time a service runs it
only receives the resolved user identifier (or nothing). Binding that
identifier to the log context is left to the request layer, which owns
the context lifetime.
"""

from typing import Any, Optional

from mealboard.core.exceptions import AuthenticationError


def require_user_id(identity: Optional[Any]) -> str:
    """
    Return the verified user identifier or raise.

    Args:
        identity: Identifier produced by the identity collaborator

    Raises:
        AuthenticationError: If the caller is unauthenticated
    """
    if identity is None or not str(identity).strip():
        raise AuthenticationError()

    return str(identity).strip()
