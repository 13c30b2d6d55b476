from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str = Field(..., description="처리 결과 메시지")


class HealthResponse(BaseModel):
    status: str = Field(..., description="healthy | unhealthy")
