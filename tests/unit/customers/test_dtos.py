"""Unit tests for Customer DTOs.

Covers:
- CustomerRequestDTO: payload parsing, defaults, type errors, immutability.
- LoginDTO: required fields, password kept out of repr.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.customers.dtos import CustomerRequestDTO, LoginDTO

pytestmark = pytest.mark.unit


class TestCustomerRequestDTO:
    def test_from_payload_reads_known_fields(self):
        dto = CustomerRequestDTO.from_payload(
            {"name": "Gustavo", "email": "g@fakeemail.com", "password": "123456", "extra": 1}
        )
        assert dto.name == "Gustavo"
        assert dto.email == "g@fakeemail.com"
        assert dto.password == "123456"

    def test_missing_fields_default_to_empty(self):
        dto = CustomerRequestDTO.from_payload({})
        assert (dto.name, dto.email, dto.password) == ("", "", "")

    def test_none_counts_as_missing(self):
        dto = CustomerRequestDTO.from_payload({"name": None})
        assert dto.name == ""

    def test_non_string_field_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            CustomerRequestDTO.from_payload({"name": ["a"]})
        assert exc_info.value.errors()[0]["loc"] == ("name",)

    def test_is_frozen(self):
        dto = CustomerRequestDTO(name="a")
        with pytest.raises(ValidationError):
            dto.name = "b"

    def test_password_not_in_repr(self):
        dto = CustomerRequestDTO(name="a", email="a@fakeemail.com", password="s3cret")
        assert "s3cret" not in repr(dto)


class TestLoginDTO:
    def test_requires_both_fields(self):
        with pytest.raises(ValidationError):
            LoginDTO(email="a@fakeemail.com")

    def test_password_not_in_repr(self):
        dto = LoginDTO(email="a@fakeemail.com", password="s3cret")
        assert "s3cret" not in repr(dto)
