"""Test data factories for the Membership service"""

from libs.common import hash_password

TEST_SECRET = "test-secret-key-for-testing-only-0123456789abcdefghijklmnopqrstuv"


def fast_hash(plaintext: str) -> str:
    """bcrypt 최소 cost 로 해시 (테스트 속도용)"""
    return hash_password(plaintext, rounds=4)


def member_payload(**overrides) -> dict:
    """Request body for POST /members"""
    payload = {
        "id": "m-100",
        "email": "carol@example.com",
        "name": "Carol",
        "password": "s3cret-pass",
        "role": "admin",
        "created_at": "2024-05-01T12:30:45",
    }
    payload.update(overrides)
    return payload
