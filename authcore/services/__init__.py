"""Services layer - business logic and external integrations.

- repositories/: Data access layer (the credential store)
- shared/: Shared HTTP client infrastructure
- token_service / password_hasher: Session tokens, reset tokens, bcrypt
- password_service: Register, login, password change, forgot/reset
- bvn_service: BVN verification workflow
- email_service / sms_service / paystack_client: External collaborators
"""

from authcore.services.bvn_service import BvnVerificationService, VerificationState
from authcore.services.password_service import PasswordService
from authcore.services.repositories import UserRepository
from authcore.services.token_service import TokenService

__all__ = [
    "BvnVerificationService",
    "PasswordService",
    "TokenService",
    "UserRepository",
    "VerificationState",
]
