"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CustomerRequestDTO``: body of create/update requests.  Field rules
  (blank name, malformed email, ...) live in ``validators.py`` so every
  violation is reported together; the DTO only enforces shape.
- ``LoginDTO``: credentials for token issuance.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


class CustomerRequestDTO(BaseModel):
    """Immutable DTO for customer create/update requests.

    Missing fields default to ``""`` and are then rejected by the
    request validator, alongside any other violation.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    password: str = Field(default="", repr=False)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> CustomerRequestDTO:
        """Build from a parsed JSON body, ignoring unknown keys.

        ``None`` values count as missing.

        Raises:
            pydantic.ValidationError: when a field is not a string.
        """
        fields = {
            key: data[key]
            for key in ("name", "email", "password")
            if data.get(key) is not None
        }
        return cls(**fields)


class LoginDTO(BaseModel):
    """Immutable DTO for ``POST /auth/login/``."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str = Field(repr=False)
