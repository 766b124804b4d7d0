"""Shared HTTP session configuration."""

import requests

USER_AGENT = "essentiality-map/0.1"


def create_session(user_agent: str = USER_AGENT) -> requests.Session:
    """
    Create a requests Session with standard JSON headers.

    No retry adapter is mounted: a failed fetch is reported to the user, who
    can submit again.

    Args:
        user_agent: User-Agent header value

    Returns:
        Configured requests.Session
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
    )
    return session
