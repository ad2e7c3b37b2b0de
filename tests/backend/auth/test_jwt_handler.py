from datetime import datetime, timedelta, timezone

import jwt
import pytest

from backend.auth.jwt_handler import InvalidToken, TokenIssuer


def _claims() -> dict:
    return {'id': 'u1', 'email': 'a@x.com', 'role': 'student'}


def test_issued_token_verifies_before_expiry(tokens: TokenIssuer) -> None:
    token = tokens.issue(_claims())

    claims = tokens.verify(token)

    assert claims['id'] == 'u1'
    assert claims['email'] == 'a@x.com'
    assert claims['role'] == 'student'
    assert claims['exp'] - claims['iat'] == 24 * 60 * 60


def test_token_is_rejected_after_expiry(tokens: TokenIssuer) -> None:
    issued_at = datetime.now(timezone.utc) - timedelta(days=2)
    token = tokens.issue(_claims(), now=issued_at)

    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_custom_ttl_overrides_default(tokens: TokenIssuer) -> None:
    token = tokens.issue(_claims(), ttl=timedelta(minutes=5))

    claims = tokens.verify(token)

    assert claims['exp'] - claims['iat'] == 5 * 60


def test_tampered_signature_is_rejected(tokens: TokenIssuer) -> None:
    header, payload, signature = tokens.issue(_claims()).split('.')
    flipped = ('A' if signature[0] != 'A' else 'B') + signature[1:]

    with pytest.raises(InvalidToken):
        tokens.verify(f'{header}.{payload}.{flipped}')


def test_token_signed_with_other_secret_is_rejected(tokens: TokenIssuer) -> None:
    forged = TokenIssuer(secret_key='another-secret-key-of-reasonable-length').issue(_claims())

    with pytest.raises(InvalidToken):
        tokens.verify(forged)


def test_token_without_expiry_is_rejected(tokens: TokenIssuer) -> None:
    token = jwt.encode(_claims(), 'test-secret-key-with-enough-length-for-hs256', algorithm='HS256')

    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_garbage_token_is_rejected(tokens: TokenIssuer) -> None:
    with pytest.raises(InvalidToken):
        tokens.verify('not.a.token')


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        TokenIssuer(secret_key='')
