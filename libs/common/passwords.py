"""
비밀번호 해시/검증 모듈
bcrypt 기반의 단방향 해시와 상수 시간 비교를 제공합니다.
"""
import bcrypt

# bcrypt 입력 한도 (바이트)
MAX_PASSWORD_BYTES = 72
BCRYPT_ROUNDS = 12


class PasswordHashError(Exception):
    """해시 생성 자체가 실패한 경우 (엔트로피 부족 등)"""


class MalformedHashError(Exception):
    """저장된 값이 bcrypt 해시 형식이 아닌 경우"""


def hash_password(plaintext: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    평문 비밀번호를 bcrypt로 해시합니다.
    호출할 때마다 새로운 salt가 생성되므로 같은 입력이라도 결과가 다릅니다.

    Raises:
        PasswordHashError: salt 생성 또는 해시 계산에 실패한 경우
    """
    try:
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    except (ValueError, OSError) as exc:
        raise PasswordHashError("비밀번호 해시 생성에 실패했습니다.") from exc
    return hashed.decode("utf-8")


def verify_password(hashed_value: str, candidate: str) -> bool:
    """
    저장된 해시와 후보 평문을 비교합니다.
    불일치는 예외가 아니라 False로 반환합니다.

    Raises:
        MalformedHashError: hashed_value가 올바른 bcrypt 해시가 아닌 경우
    """
    if not hashed_value:
        raise MalformedHashError("저장된 해시 값이 비어있습니다.")

    candidate_bytes = candidate.encode("utf-8")
    if len(candidate_bytes) > MAX_PASSWORD_BYTES:
        # 한도를 넘는 값은 애초에 해시될 수 없었으므로 일치할 수 없음
        return False

    try:
        return bcrypt.checkpw(candidate_bytes, hashed_value.encode("utf-8"))
    except ValueError as exc:
        raise MalformedHashError("저장된 해시 형식이 올바르지 않습니다.") from exc
