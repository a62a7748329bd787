"""Tests for the BVN verification workflow."""

from unittest.mock import MagicMock

import pytest

from authcore.services.bvn_service import (
    BvnVerificationService,
    VerificationState,
    generate_code,
    verification_state,
)
from authcore.services.exceptions import (
    AlreadyVerifiedError,
    DeliveryError,
    ExpiredError,
    IdentityLookupError,
    MismatchError,
)
from authcore.services.paystack_client import BvnIdentity, PaystackClient
from authcore.services.repositories.user_repository import UserRepository
from authcore.services.sms_service import SmsService
from authcore.services.token_service import hash_token

IDENTITY = BvnIdentity(first_name="ADA", last_name="OBI", mobile="08031234567")


@pytest.fixture
def users(db):
    return UserRepository(db)


@pytest.fixture
def user(users):
    return users.create(
        first_name="Ada", last_name="Obi", email="a@x.com", password_hash="x", phone="0803"
    )


@pytest.fixture
def lookup():
    lookup = MagicMock(spec=PaystackClient)
    lookup.resolve_bvn.return_value = IDENTITY
    return lookup


@pytest.fixture
def sms():
    sms = MagicMock(spec=SmsService)
    sms.send_bvn_code.return_value = True
    return sms


@pytest.fixture
def service(users, lookup, sms, settings, clock):
    return BvnVerificationService(users, lookup, sms, settings, clock)


def _sent_code(sms) -> str:
    return sms.send_bvn_code.call_args[0][1]


def test_generate_code_is_six_digits():
    for _ in range(20):
        code = generate_code()
        assert len(code) == 6
        assert code.isdigit()


class TestRequestVerification:
    def test_issues_code_and_returns_identity(self, service, users, user, lookup, sms, clock):
        identity = service.request_verification(user.id, "12345678901")

        assert identity == IDENTITY
        lookup.resolve_bvn.assert_called_once_with("12345678901")
        sms.send_bvn_code.assert_called_once()
        mobile, code, minutes = sms.send_bvn_code.call_args[0]
        assert mobile == IDENTITY.mobile
        assert minutes == 10

        stored = users.get_by_id(user.id)
        assert stored.bvn_code_hash == hash_token(code)
        assert stored.bvn_code_expire is not None
        assert verification_state(stored) is VerificationState.CODE_ISSUED

    def test_lookup_failure_is_surfaced(self, service, users, user, lookup, sms):
        lookup.resolve_bvn.side_effect = IdentityLookupError()

        with pytest.raises(IdentityLookupError, match="Enter a valid BVN Number"):
            service.request_verification(user.id, "00000000000")

        sms.send_bvn_code.assert_not_called()
        assert verification_state(users.get_by_id(user.id)) is VerificationState.UNVERIFIED

    def test_sms_failure_discards_code(self, service, users, user, sms):
        sms.send_bvn_code.return_value = False

        with pytest.raises(DeliveryError):
            service.request_verification(user.id, "12345678901")

        stored = users.get_by_id(user.id)
        assert stored.bvn_code_hash is None
        assert stored.bvn_code_expire is None

    def test_new_request_overwrites_previous_code(self, service, user, sms):
        service.request_verification(user.id, "12345678901")
        first = _sent_code(sms)
        service.request_verification(user.id, "12345678901")
        second = _sent_code(sms)

        if first != second:
            with pytest.raises(MismatchError):
                service.submit_verification(user.id, first)
        service.submit_verification(user.id, second)

    def test_verified_user_cannot_request_again(self, service, users, user):
        users.update(user.id, is_verified=True)

        with pytest.raises(AlreadyVerifiedError):
            service.request_verification(user.id, "12345678901")


class TestSubmitVerification:
    def test_correct_code_verifies_user(self, service, users, user, sms):
        service.request_verification(user.id, "12345678901")

        verified = service.submit_verification(user.id, _sent_code(sms))

        assert verified.is_verified is True
        assert verification_state(users.get_by_id(user.id)) is VerificationState.VERIFIED

    def test_code_accepted_at_exact_expiry(self, service, user, sms, clock):
        service.request_verification(user.id, "12345678901")
        clock.advance(minutes=10)

        assert service.submit_verification(user.id, _sent_code(sms)).is_verified is True

    def test_expired_code_rejected_even_when_correct(self, service, users, user, sms, clock):
        service.request_verification(user.id, "12345678901")
        clock.advance(minutes=10, seconds=1)

        with pytest.raises(ExpiredError, match="Bvn token expired"):
            service.submit_verification(user.id, _sent_code(sms))

        assert users.get_by_id(user.id).is_verified is False

    def test_expiry_checked_before_equality(self, service, user, clock):
        service.request_verification(user.id, "12345678901")
        clock.advance(minutes=30)

        with pytest.raises(ExpiredError):
            service.submit_verification(user.id, "wrong")

    def test_wrong_code(self, service, users, user, sms):
        service.request_verification(user.id, "12345678901")
        wrong = "1" + _sent_code(sms)

        with pytest.raises(MismatchError, match="Invalid token"):
            service.submit_verification(user.id, wrong)

        stored = users.get_by_id(user.id)
        assert stored.is_verified is False
        assert verification_state(stored) is VerificationState.CODE_ISSUED

    def test_no_code_issued(self, service, user):
        with pytest.raises(ExpiredError):
            service.submit_verification(user.id, "123456")

    def test_resubmission_after_verified_rejected(self, service, user, sms):
        service.request_verification(user.id, "12345678901")
        code = _sent_code(sms)
        service.submit_verification(user.id, code)

        with pytest.raises(AlreadyVerifiedError):
            service.submit_verification(user.id, code)
