"""Account balance data models."""

from __future__ import annotations

from pydantic import Field

from mpesa_sdk.models.common import InitiatorRequest


class AccountBalanceQueryConfig(InitiatorRequest):
    """Balance query input.

    ``command_id`` and ``identifier_type`` are accepted for compatibility but
    the outbound body always carries AccountBalance / "4".
    """
    command_id: str | None = Field(default=None, alias="CommandID")
    party_a: int = Field(alias="PartyA")
    identifier_type: str | None = Field(default=None, alias="IdentifierType")
