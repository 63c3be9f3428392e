"""
Token Signer.

Mints the short-lived bearer tokens sent with every device server request.
Each token is a compact JWS asserting an organization claim with an absolute
expiry, signed with the pre-shared key using an HMAC algorithm.
"""

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from jose import jwt
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError

from dsclient.core.exceptions import ConfigError, SigningError

SUPPORTED_ALGORITHMS = frozenset(ALGORITHMS.HMAC)


@dataclass(frozen=True)
class OrgClaim:
    """Organization claim carried by a bearer token."""

    org_id: int
    exp: int

    @classmethod
    def issue(cls, org_id: int, lifetime: timedelta) -> "OrgClaim":
        """Create a claim that expires `lifetime` from now."""
        return cls(org_id=org_id, exp=int(time.time() + lifetime.total_seconds()))

    def to_claims(self) -> dict[str, Any]:
        return {"OrgID": self.org_id, "exp": self.exp}


class TokenSigner:
    """
    Signs organization claims with a fixed symmetric key.

    The key and algorithm are set once at construction and never change.
    `sign_serialize` keeps no state between calls, so one signer can be
    shared by concurrent requests.

    Usage:
        signer = TokenSigner("HS256", psk)
        token = signer.sign_serialize(OrgClaim.issue(0, timedelta(minutes=60)))
    """

    def __init__(self, algorithm: str, key: str | bytes) -> None:
        """
        Configure the signer.

        Raises:
            ConfigError: If the key is empty or the algorithm is not an
                HMAC algorithm.
        """
        if not key:
            raise ConfigError("signing key must not be empty")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigError(
                f"unsupported signing algorithm: {algorithm} "
                f"(expected one of {', '.join(sorted(SUPPORTED_ALGORITHMS))})"
            )
        self._algorithm = algorithm
        self._key = key

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def sign_serialize(self, claim: OrgClaim) -> str:
        """
        Serialize and sign a claim into a compact token.

        Raises:
            SigningError: If the claim has already expired or cannot be signed.
        """
        if claim.exp <= time.time():
            raise SigningError("claim expiry must be in the future")
        try:
            return jwt.encode(claim.to_claims(), self._key, algorithm=self._algorithm)
        except (JOSEError, TypeError, ValueError) as e:
            raise SigningError(f"unable to sign claim: {e}") from e
