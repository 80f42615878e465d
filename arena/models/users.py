from pydantic import BaseModel, Field

# 요청 모델
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)

class LoginRequest(BaseModel):
    name: str
    password: str

# 응답 모델
class TokenResponse(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
