"""
Notifications app

Outgoing email with a delivery log. Other apps call
`service.send_email(...)`; delivery goes through the provider selected by
NOTIFICATIONS_EMAIL_PROVIDER (noop by default, smtp when configured).
"""

from . import models  # noqa: F401

__all__ = ["models"]
