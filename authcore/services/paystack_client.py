"""Paystack client for resolving a BVN to identity attributes."""

import logging
from dataclasses import dataclass

import httpx

from authcore.config import Settings
from authcore.services.exceptions import IdentityLookupError
from authcore.services.shared.http_client import HTTPClient, HTTPClientError

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ("first_name", "last_name", "mobile")


@dataclass(frozen=True)
class BvnIdentity:
    first_name: str
    last_name: str
    mobile: str


class PaystackClient(HTTPClient):
    """Client for the Paystack BVN resolution endpoint.

    Usage:
        with PaystackClient(settings) as client:
            identity = client.resolve_bvn("12345678901")
    """

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None):
        super().__init__(
            base_url=settings.paystack_base_url,
            timeout=settings.paystack_timeout,
            headers={"Authorization": f"Bearer {settings.paystack_secret_key}"},
            transport=transport,
        )

    def resolve_bvn(self, bvn: str) -> BvnIdentity:
        """Resolve a BVN.

        Raises:
            IdentityLookupError: if the BVN is malformed, unknown, or the
                lookup could not be completed.
        """
        if not bvn or not bvn.isdigit():
            raise IdentityLookupError()

        try:
            payload = self.get_json(f"/bank/resolve_bvn/{bvn}")
        except HTTPClientError as e:
            logger.warning(f"BVN lookup failed: {e} (status={e.status_code})")
            raise IdentityLookupError() from e
        except ValueError as e:
            logger.warning(f"BVN lookup returned non-JSON body: {e}")
            raise IdentityLookupError() from e

        if not isinstance(payload, dict) or str(payload.get("status")).lower() != "true":
            logger.info("BVN lookup rejected by Paystack")
            raise IdentityLookupError()

        data = payload.get("data")
        if not isinstance(data, dict):
            logger.warning("BVN lookup response has no data")
            raise IdentityLookupError()

        missing = [field for field in IDENTITY_FIELDS if not data.get(field)]
        if missing:
            logger.warning(f"BVN lookup response missing fields: {', '.join(missing)}")
            raise IdentityLookupError()

        return BvnIdentity(**{field: str(data[field]) for field in IDENTITY_FIELDS})
