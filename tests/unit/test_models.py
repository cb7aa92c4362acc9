"""
Pydantic model validation tests.

No AWS connection required.

Run with: pytest tests/unit/test_models.py -v
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from models import ApplicantInput, ApplicantRecord, BookingRequest, PaymentType, TicketRecord

CREATED = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


class TestApplicantInput:
    def test_accepts_camel_case_form_fields(self):
        applicant = ApplicantInput.model_validate(
            {"name": "Kavitha", "fatherName": "Ravi", "aadharFile": "/uploads/1-a.pdf", "passType": "Senior"}
        )
        assert applicant.father_name == "Ravi"
        assert applicant.aadhar_file == "/uploads/1-a.pdf"
        assert applicant.pass_type == "Senior"

    def test_numbers_become_text(self):
        applicant = ApplicantInput.model_validate({"ageYears": 64, "pincode": 500001})
        assert applicant.age_years == "64"
        assert applicant.pincode == "500001"

    def test_blank_strings_become_none(self):
        applicant = ApplicantInput.model_validate({"whatsapp": "  ", "number": ""})
        assert applicant.whatsapp is None
        assert applicant.number is None


class TestApplicantRecord:
    def _record(self, **overrides):
        fields = dict(
            record_ref="a" * 32,
            pass_id="TSRTC-00000001",
            qr_code="data:image/png;base64,AAAA",
            name="Kavitha",
            phone="9000000001",
            whatsapp="9000000002",
            created_at=CREATED,
        )
        fields.update(overrides)
        return ApplicantRecord(**fields)

    def test_defaults_for_counter_issuance(self):
        record = self._record()
        assert record.payment_mode == "FREE SCHEME"
        assert record.delivery_mode == "Bus Pass Counter"
        assert record.photo == ""

    def test_dump_uses_api_names(self):
        data = self._record().model_dump(by_alias=True)
        assert data["id"] == "a" * 32
        assert data["passId"] == "TSRTC-00000001"
        assert "record_ref" not in data

    def test_pass_id_required(self):
        with pytest.raises(ValidationError):
            ApplicantRecord(record_ref="a" * 32, qr_code="x", created_at=CREATED)


class TestTickets:
    def test_booking_request_accepts_front_end_names(self):
        request = BookingRequest.model_validate(
            {"applicantId": "a" * 32, "paymentType": "PAID", "amount": 40}
        )
        assert request.applicant_ref == "a" * 32
        assert request.payment_type == "PAID"
        assert request.amount == 40

    def _ticket(self, amount):
        return TicketRecord(
            ticket_id="t" * 32,
            applicant_ref="a" * 32,
            source="Secunderabad",
            destination="Uppal",
            payment_type=PaymentType.PAID,
            amount=amount,
            booked_at=CREATED,
        )

    def test_whole_amount_serializes_as_int(self):
        assert self._ticket(Decimal("50")).model_dump(mode="json")["amount"] == 50

    def test_fractional_amount_serializes_as_float(self):
        assert self._ticket(Decimal("12.5")).model_dump(mode="json")["amount"] == 12.5

    def test_python_dump_keeps_decimal(self):
        assert self._ticket(Decimal("12.5")).model_dump()["amount"] == Decimal("12.5")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            self._ticket(Decimal("-1"))

    def test_payment_type_values(self):
        assert PaymentType.FREE.value == "FREE"
        assert PaymentType.PAID.value == "PAID"
