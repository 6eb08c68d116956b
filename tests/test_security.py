from jose import jwt

from society.config import settings
from society.core.security import (
    SessionClaims,
    current_time_ms,
    decode_session_token,
    encode_session_token,
    hash_password,
    issue_session_claims,
    verify_password,
)
from society.models.role import Role
from society.models.user import User

DAY_MS = 24 * 60 * 60 * 1000


def make_claims(expires_at: int | None = None) -> SessionClaims:
    return SessionClaims(
        subject_id="42",
        email="resident@society.com",
        role=Role.RESIDENT,
        name="John Resident",
        expires_at=expires_at if expires_at is not None else current_time_ms() + DAY_MS,
    )


class TestSessionTokenCodec:
    """Encoding and decoding of session tokens"""

    def test_round_trip_preserves_claims(self):
        """Decoding an encoded token gives back the same claims"""
        claims = make_claims()
        assert decode_session_token(encode_session_token(claims)) == claims

    def test_decode_is_idempotent(self):
        """Decoding the same token twice yields equal results"""
        token = encode_session_token(make_claims())
        assert decode_session_token(token) == decode_session_token(token)

    def test_expired_token_decodes_to_none(self):
        """A token whose expiry has passed is treated as no session"""
        claims = make_claims(expires_at=current_time_ms() + 60_000)
        token = encode_session_token(claims)
        assert decode_session_token(token, now_ms=claims.expires_at + 1) is None

    def test_token_expiring_exactly_now_is_rejected(self):
        """Expiry equal to the reference time counts as expired"""
        claims = make_claims(expires_at=current_time_ms() + 60_000)
        token = encode_session_token(claims)
        assert decode_session_token(token, now_ms=claims.expires_at) is None

    def test_token_valid_before_expiry(self):
        claims = make_claims(expires_at=current_time_ms() + 60_000)
        token = encode_session_token(claims)
        assert decode_session_token(token, now_ms=claims.expires_at - 1) == claims

    def test_wrong_signing_key_rejected(self):
        """Tokens signed with another key never decode"""
        payload = make_claims().to_dict()
        forged = jwt.encode(
            {
                "sub": payload["subject_id"],
                "email": payload["email"],
                "role": "admin",
                "name": payload["name"],
                "exp_ms": payload["expires_at"],
            },
            "not-the-secret",
            algorithm="HS256",
        )
        assert decode_session_token(forged) is None

    def test_tampered_payload_rejected(self):
        """Changing any byte of the payload breaks the signature"""
        header, payload, signature = encode_session_token(make_claims()).split(".")
        tampered = f"{header}.{payload[:-2]}xx.{signature}"
        assert decode_session_token(tampered) is None

    def test_garbage_token_rejected(self):
        """Random strings decode to None"""
        assert decode_session_token("not-a-token") is None
        assert decode_session_token("") is None

    def test_unknown_role_rejected(self):
        """A correctly signed token naming an unknown role is no session"""
        token = jwt.encode(
            {
                "sub": "1",
                "email": "x@society.com",
                "role": "janitor",
                "name": "X",
                "exp_ms": current_time_ms() + DAY_MS,
            },
            settings.SECRET_KEY,
            algorithm=settings.TOKEN_ALGORITHM,
        )
        assert decode_session_token(token) is None

    def test_missing_claim_rejected(self):
        token = jwt.encode(
            {"sub": "1", "role": "admin", "exp_ms": current_time_ms() + DAY_MS},
            settings.SECRET_KEY,
            algorithm=settings.TOKEN_ALGORITHM,
        )
        assert decode_session_token(token) is None

    def test_issue_claims_expire_after_session_ttl(self):
        """Issued claims carry the user's identity and a 7 day expiry"""
        user = User(id=7, email="admin@society.com", name="Admin User", role=Role.ADMIN)
        claims = issue_session_claims(user, now_ms=1_000)

        assert claims.subject_id == "7"
        assert claims.role == Role.ADMIN
        assert claims.expires_at == 1_000 + settings.SESSION_TTL_DAYS * DAY_MS


class TestPasswordHashing:
    """Salted password hashing"""

    def test_hash_verifies(self):
        stored = hash_password("resident123")
        assert verify_password("resident123", stored)
        assert not verify_password("resident124", stored)

    def test_hash_is_not_plaintext_or_base64(self):
        stored = hash_password("resident123")
        assert stored != "resident123"
        assert stored != "cmVzaWRlbnQxMjM="

    def test_hash_is_salted(self):
        """Hashing the same password twice gives different hashes"""
        assert hash_password("admin123") != hash_password("admin123")

    def test_unrecognised_stored_value_never_matches(self):
        """Unknown stored format never verifies"""
        assert not verify_password("resident123", "cmVzaWRlbnQxMjM=")
