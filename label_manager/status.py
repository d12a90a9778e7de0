# =============================================================================
# Label Manager - Status Messages
# =============================================================================
"""
Human-readable messages for GitHub response statuses.

Pure mapping; callers decide whether to log the text, raise with it, or
ignore it.
"""

from http import HTTPStatus

import httpx


def _reason_for(status_code: int, reason: str) -> str:
    """Fall back to the standard phrase when the response carried none."""
    if reason:
        return reason
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def compose_status_message(status_code: int, reason: str = "") -> str:
    """
    Compose a status message for a response.

    Args:
        status_code: HTTP status code.
        reason: HTTP reason phrase (standard phrase when empty).

    Returns:
        Message to show the user.
    """
    if 200 <= status_code < 300:
        return f"{status_code} status OK."

    prefix = f"{status_code} {_reason_for(status_code, reason)}".rstrip() + "."

    if status_code == 401:
        return f"{prefix} Please check the input values of your login information."
    if status_code == 403:
        return (
            f"{prefix} The GitHub server refused your request."
            " Maybe you have exceeded your rate limit."
            " Please wait for a little while."
        )
    if status_code == 404:
        return (
            f"{prefix} Repository not found."
            " Please check the input values of your login information."
        )
    return f"{prefix} Error occurred."


def describe_response(response: httpx.Response) -> str:
    """Compose the status message for an httpx response."""
    return compose_status_message(response.status_code, response.reason_phrase)
