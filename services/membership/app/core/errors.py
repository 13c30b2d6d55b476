"""
회원 서비스 에러 정의
각 에러는 HTTP 상태 코드와 클라이언트에 노출해도 되는 메시지를 가집니다.
내부 상세(message)는 서버 로그에만 남깁니다.
"""
from fastapi import status


class MembershipError(Exception):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Internal server error"

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ValidationError(MembershipError):
    """요청 본문이 올바르지 않은 경우"""
    http_status = status.HTTP_400_BAD_REQUEST
    public_message = "Invalid request body"

    def __init__(self, message: str):
        super().__init__("ERR-IVD-VALUE", message)


class NotFoundError(MembershipError):
    """회원이 존재하지 않는 경우"""
    http_status = status.HTTP_404_NOT_FOUND
    public_message = "Member not found"

    def __init__(self, member_id: str):
        super().__init__("ERR-NOT-FOUND", f"member '{member_id}' not found")
        self.member_id = member_id


class UnauthorizedError(MembershipError):
    """로그인 자격 증명이 올바르지 않은 경우"""
    http_status = status.HTTP_401_UNAUTHORIZED
    public_message = "Invalid credentials"

    def __init__(self, message: str):
        super().__init__("ERR-IVD-CRED", message)


class StoreError(MembershipError):
    """저장소 작업 실패 (연결 오류, 쓰기 실패, 제약 조건 위반 등)"""

    def __init__(self, operation: str, message: str, code: str = "ERR-STORE"):
        super().__init__(code, f"{operation}: {message}")
        self.operation = operation

    @property
    def public_message(self) -> str:
        return f"Failed to {self.operation} member"


class RecordFormatError(StoreError):
    """저장된 행의 값(created_at 등)을 해석할 수 없는 경우"""

    def __init__(self, operation: str, message: str):
        super().__init__(operation, message, code="ERR-STORE-FORMAT")


class TokenIssueError(MembershipError):
    public_message = "Failed to generate token"

    def __init__(self, message: str):
        super().__init__("ERR-TOKEN-ISSUE", message)
