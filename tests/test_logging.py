import logging

import pytest

from config.settings import mask_sensitive_data

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_password_value_masked(self):
        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_value_masked(self):
        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_authorization_header_masked(self):
        event_dict = {"event": "test", "header": "Authorization: Bearer.eyJhbGciOi"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "eyJhbGciOi" not in result["header"]

    def test_sensitive_keys_masked_whatever_the_value(self):
        event_dict = {"event": "test", "password": "s3cret", "password_hash": "md5$x$y"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["password"] == "***MASKED***"
        assert result["password_hash"] == "***MASKED***"

    def test_non_sensitive_data_unchanged(self):
        event_dict = {"event": "customer.created", "customer_id": "0190-abc", "email": "a@b.com"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result == {"event": "customer.created", "customer_id": "0190-abc", "email": "a@b.com"}


class TestServiceLogging:
    def test_login_does_not_log_the_password(self, api_client, make_customer, caplog):
        make_customer(email="log@fakeemail.com", password="hunter2-secret")
        with caplog.at_level(logging.INFO):
            api_client.post(
                "/api/v1/auth/login/",
                {"email": "log@fakeemail.com", "password": "hunter2-secret"},
                format="json",
            )
        assert caplog.records
        assert all("hunter2-secret" not in record.getMessage() for record in caplog.records)
