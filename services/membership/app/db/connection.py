import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from sqlalchemy.engine import URL, make_url

from libs.common.auth import DEFAULT_JWT_ALGORITHM, DEFAULT_JWT_SECRET

ROOT_DIR = Path(__file__).parent.parent.parent.parent.parent
DEFAULT_CONFIG_FILE = "config/config.json"

# 라우트 프로필별 기본 포트
DEFAULT_PORTS = {"protected": 8001, "open": 8000}

_DRIVERS = {
    "mysql": "mysql+pymysql",
    "postgres": "postgresql+psycopg2",
    "postgresql": "postgresql+psycopg2",
    "sqlite": "sqlite",
}


class SettingsError(Exception):
    """설정 파일을 읽을 수 없거나 값이 올바르지 않은 경우"""


def config_file_path() -> Path:
    path = Path(os.getenv("MEMBERSHIP_CONFIG_FILE", DEFAULT_CONFIG_FILE))
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


class DBConfig(BaseModel):
    """config.json 의 DB 블록"""

    USERNAME: str = "root"
    PASSWORD: str = "password"
    HOST: str = "localhost"
    PORT: int = 3306
    DB_NAME: str = "membership"
    KIND: str = "mysql"

    def url(self) -> URL:
        kind = self.KIND.lower()
        if kind not in _DRIVERS:
            raise ValueError(f"지원하지 않는 DB 종류입니다: {self.KIND}")
        if kind == "sqlite":
            return URL.create("sqlite", database=self.DB_NAME)
        return URL.create(
            _DRIVERS[kind],
            username=self.USERNAME,
            password=self.PASSWORD,
            host=self.HOST,
            port=self.PORT,
            database=self.DB_NAME,
        )


class Settings(BaseSettings):
    """
    환경 변수, .env 파일, config.json 순서로 값을 읽어오는 Pydantic 설정 모델
    """

    APP_NAME: str = "membership"
    APP_PORT: int | None = None
    # 환경 변수 PORT 가 있으면 APP_PORT 보다 우선
    PORT: int | None = None

    DB: DBConfig = DBConfig()
    # 설정되어 있으면 DB 블록 대신 사용
    MEMBERSHIP_DATABASE_URL: str | None = None

    # 커넥션 풀: 유휴 연결 수 / 추가 연결 수 / 연결 최대 생존 시간(초)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 90
    DB_POOL_RECYCLE: int = 3600

    # JWT 설정
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = DEFAULT_JWT_ALGORITHM
    ACCESS_TOKEN_TTL_MINUTES: int = 60

    # protected: /api 하위에서 토큰 검증, open: 루트에서 검증 없이 노출
    MEMBER_ROUTES: Literal["protected", "open"] = "protected"

    # 환경 설정
    ENVIRONMENT: str = "development"  # development, production
    DEBUG: bool = True
    ALLOWED_ORIGINS: str = ""  # 예: "http://localhost:3000,http://localhost:5173"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["text", "json"] = "text"

    model_config = SettingsConfigDict(
        env_file=ROOT_DIR / ".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_settings = JsonConfigSettingsSource(settings_cls, json_file=config_file_path())
        return (init_settings, env_settings, dotenv_settings, json_settings, file_secret_settings)

    @property
    def database_url(self) -> URL:
        if self.MEMBERSHIP_DATABASE_URL:
            return make_url(self.MEMBERSHIP_DATABASE_URL)
        return self.DB.url()

    @property
    def listen_port(self) -> int:
        return self.PORT or self.APP_PORT or DEFAULT_PORTS[self.MEMBER_ROUTES]

    @property
    def is_development(self) -> bool:
        """개발 환경 여부 확인"""
        return self.ENVIRONMENT.lower() in ("development", "dev") or self.DEBUG


def load_settings(require_config_file: bool = False) -> Settings:
    """
    설정을 읽어옵니다.

    Args:
        require_config_file: True이면 config.json 이 없거나 읽을 수 없을 때 실패

    Raises:
        SettingsError: 설정 파일 또는 값이 올바르지 않은 경우
    """
    path = config_file_path()
    if require_config_file:
        try:
            with path.open(encoding="utf-8") as fp:
                json.load(fp)
        except (OSError, json.JSONDecodeError) as exc:
            raise SettingsError(f"config file {path} is unreadable: {exc}") from exc

    try:
        return Settings()
    except (ValidationError, json.JSONDecodeError, OSError) as exc:
        raise SettingsError(f"invalid settings: {exc}") from exc
