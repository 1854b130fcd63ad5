from typing import Optional
from pydantic import BaseModel

from app.schemas.producer import ProducerRead


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    producer: ProducerRead
    token: str


# Identity decoded from a bearer token
class TokenPayload(BaseModel):
    id: int
    name: str
