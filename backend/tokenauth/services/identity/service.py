"""
CredentialChecker
=================

Stand-in for a user directory: a single account configured through settings.
Verification only, no token issuance and no password hashing policy.
"""

from __future__ import annotations

import hmac


class CredentialChecker:
    """
    Verify submitted credentials against one configured account.

    :param email: Expected email.
    :param password: Expected password.
    :param subject_id: Subject identifier returned on success.
    """

    def __init__(self, *, email: str, password: str, subject_id: str) -> None:
        self._email = email
        self._password = password
        self.subject_id = subject_id

    def authenticate(self, email: str | None, password: str | None) -> str | None:
        """
        Authenticate by email and password.

        :returns: The subject id when both match, otherwise ``None``.
        :rtype: str | None
        """
        if not email or not password:
            return None
        # Evaluate both comparisons to keep timing independent of which one fails.
        email_ok = hmac.compare_digest(email.encode("utf-8"), self._email.encode("utf-8"))
        password_ok = hmac.compare_digest(
            password.encode("utf-8"), self._password.encode("utf-8")
        )
        if email_ok and password_ok:
            return self.subject_id
        return None
