"""Service providers for FastAPI routes.

Each request gets services bound to its own database session. Tests swap
collaborators through ``app.dependency_overrides``.
"""

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from authcore.config import Settings, get_settings
from authcore.database import get_db
from authcore.services.bvn_service import BvnVerificationService
from authcore.services.email_service import EmailService
from authcore.services.password_service import PasswordService
from authcore.services.paystack_client import PaystackClient
from authcore.services.repositories.user_repository import UserRepository
from authcore.services.sms_service import SmsService
from authcore.services.token_service import TokenService


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def get_email_service(settings: Settings = Depends(get_settings)) -> EmailService:
    return EmailService(settings)


def get_sms_service(settings: Settings = Depends(get_settings)) -> SmsService:
    return SmsService(settings)


def get_paystack_client(
    settings: Settings = Depends(get_settings),
) -> Generator[PaystackClient, None, None]:
    with PaystackClient(settings) as client:
        yield client


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_password_service(
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
    notifier: EmailService = Depends(get_email_service),
) -> PasswordService:
    return PasswordService(users, tokens, notifier)


def get_bvn_service(
    users: UserRepository = Depends(get_user_repository),
    lookup: PaystackClient = Depends(get_paystack_client),
    sms: SmsService = Depends(get_sms_service),
    settings: Settings = Depends(get_settings),
) -> BvnVerificationService:
    return BvnVerificationService(users, lookup, sms, settings)
