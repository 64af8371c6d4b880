"""Tests for tenant registration request and response schemas"""

import pytest
from pydantic import ValidationError

from hrplatform.application.dtos.tenant_registration import (REGISTRATION_SUCCESS_MESSAGE,
                                                              RegisterTenantRequest,
                                                              RegisterTenantResponse)


def request_data(**overrides) -> dict:
    data = {
        "company_name": "Acme",
        "legal_name": "Acme Incorporated",
        "country": "US",
        "time_zone": "UTC",
        "currency": "USD",
        "admin_email": "owner@acme.com",
        "admin_password": "S3cure-pass",
    }
    data.update(overrides)
    return data


class TestRegisterTenantRequest:
    def test_email_is_normalized_and_full_name_defaults(self):
        request = RegisterTenantRequest(**request_data(admin_email="  Owner@ACME.com "))

        assert request.admin_email == "owner@acme.com"
        assert request.admin_full_name == "Admin"

    def test_password_is_kept_verbatim(self):
        request = RegisterTenantRequest(**request_data(admin_password=" padded pass "))

        assert request.admin_password == " padded pass "

    @pytest.mark.parametrize(
        "overrides",
        [
            {"company_name": ""},
            {"legal_name": "x" * 201},
            {"admin_email": "not-an-email"},
            {"admin_password": "short"},
            {"admin_password": "é" * 40},
        ],
    )
    def test_invalid_requests_are_rejected(self, overrides):
        with pytest.raises(ValidationError):
            RegisterTenantRequest(**request_data(**overrides))

    def test_missing_fields_are_rejected(self):
        data = request_data()
        del data["currency"]

        with pytest.raises(ValidationError):
            RegisterTenantRequest(**data)


class TestRegisterTenantResponse:
    def test_default_message(self):
        response = RegisterTenantResponse(
            tenant_id="t1",
            tenant_code="ACME1234",
            company_name="Acme",
            login_url="http://localhost:3000/login?tenant=ACME1234",
        )

        assert response.message == REGISTRATION_SUCCESS_MESSAGE
        assert response.model_dump()["tenant_code"] == "ACME1234"
