"""Marshmallow schemas for the token endpoints."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from tokenauth.services._shared.ports import TokenKind


class LoginSchema(Schema):
    """Input payload for authenticating the configured user.

    Deliberately lenient: missing fields load as empty strings so the
    credential check, not validation, decides the outcome (401, never 422).
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default="")
    password = fields.String(load_default="")


class TokenResponseSchema(Schema):
    """Response payload containing an access token."""

    access_token = fields.String(required=True, data_key="accessToken")


class ClaimsSchema(Schema):
    """Public view of verified access-token claims."""

    subject_id = fields.String(data_key="subjectId")
    kind = fields.Enum(TokenKind, by_value=True)
    token_id = fields.String(data_key="tokenId")
    issued_at = fields.DateTime(data_key="issuedAt")
    expires_at = fields.DateTime(data_key="expiresAt")
