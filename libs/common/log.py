"""
로깅 설정
모든 서비스에서 같은 형식으로 로그를 남기기 위해 사용합니다.
"""
import json
import logging
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# logger.xxx(..., extra={...}) 로 넘긴 값 중 JSON 출력에 포함할 키
CONTEXT_KEYS = ("error_code", "path", "member_id", "operation")

# setup_logging 이 루트 로거에 설치한 핸들러
_installed_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """레코드 하나를 JSON 한 줄로 직렬화합니다."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry = dict(
            timestamp=created.isoformat(timespec="milliseconds"),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        entry.update(
            (key, getattr(record, key))
            for key in CONTEXT_KEYS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """
    루트 로거에 스트림 핸들러를 설치합니다.
    다시 호출하면 이전에 설치한 핸들러를 교체하며, 다른 핸들러는 건드리지 않습니다.
    """
    global _installed_handler

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    _installed_handler = handler
    return handler
