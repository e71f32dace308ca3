"""
User identity for the cooking console.

Authentication itself happens upstream (Azure Container Apps Easy Auth).
This module only reads the identity that was injected into the request:

- X-MS-CLIENT-PRINCIPAL-ID: the user's object ID (GUID), used as session owner
- X-MS-CLIENT-PRINCIPAL-NAME: principal name (email/UPN)

Without Easy Auth the console runs as a local guest so a single-user kitchen
tablet still works.
"""

import os
import streamlit as st
from dataclasses import dataclass
from typing import Optional

GUEST_USER_ID = "local-guest"


@dataclass
class UserContext:
    """Represents the authenticated user."""
    user_id: str
    name: str
    email: Optional[str] = None


def get_current_user() -> Optional[UserContext]:
    """
    Resolve the current user from Easy Auth headers or DEV_USER_* variables.

    Returns:
        UserContext if an identity is available, None otherwise
    """
    try:
        headers = st.context.headers
        if headers:
            user_id = headers.get("x-ms-client-principal-id")
            name = headers.get("x-ms-client-principal-name")
            if user_id:
                return UserContext(user_id=user_id, name=name or "User", email=name)
    except AttributeError:
        # Streamlit version may not have st.context.headers
        pass
    except Exception:
        # Not running inside a Streamlit request
        pass

    user_id = os.environ.get("DEV_USER_ID")
    if user_id:
        return UserContext(
            user_id=user_id,
            name=os.environ.get("DEV_USER_NAME", "Dev User"),
            email=os.environ.get("DEV_USER_EMAIL")
        )

    return None


def get_user_id() -> str:
    """Owner id for new sessions; the local guest when nobody is signed in."""
    user = get_current_user()
    return user.user_id if user else GUEST_USER_ID


def get_user_display_name() -> str:
    """Get the current user's display name, or 'Guest' if not authenticated."""
    user = get_current_user()
    return user.name if user else "Guest"
