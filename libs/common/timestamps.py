"""
저장소 시각 형식 관련 유틸리티
members.created_at 은 시간대 없이 `YYYY-MM-DD HH:MM:SS` 형식으로 왕복합니다.
"""
from datetime import datetime, timezone

STORE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_naive() -> datetime:
    """
    현재 UTC 시각을 초 단위로 잘라 시간대 없이 반환합니다.
    """
    return normalize_timestamp(datetime.now(timezone.utc))


def normalize_timestamp(dt: datetime | None) -> datetime | None:
    """
    저장 형식으로 표현 가능한 값으로 맞춥니다.
    시간대가 있으면 UTC로 변환 후 제거하고, 마이크로초는 버립니다.
    """
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.replace(microsecond=0)


def format_timestamp(dt: datetime) -> str:
    return normalize_timestamp(dt).strftime(STORE_TIMESTAMP_FORMAT)


def parse_timestamp(value: datetime | str | bytes) -> datetime:
    """
    저장소에서 읽은 값을 datetime 으로 변환합니다.
    드라이버가 이미 datetime 으로 돌려준 경우 그대로 정규화만 합니다.

    Raises:
        ValueError: 형식이 맞지 않는 경우
    """
    if isinstance(value, datetime):
        return normalize_timestamp(value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if not isinstance(value, str):
        raise ValueError(f"지원하지 않는 시각 값입니다: {value!r}")
    return datetime.strptime(value, STORE_TIMESTAMP_FORMAT)
