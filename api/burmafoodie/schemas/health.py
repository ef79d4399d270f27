from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    llm_configured: bool
    model: str
