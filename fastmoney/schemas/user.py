from pydantic import BaseModel, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=32)
    password: str = Field(..., min_length=3, max_length=72)  # límite de bcrypt
    email: EmailStr

    @field_validator('username')
    @classmethod
    def username_alphanumeric(cls, v):
        if not v.replace('_', '').isalnum():
            raise ValueError('Username may only contain letters, digits and underscores')
        return v


class UserLogin(BaseModel):
    username: str
    password: str


class UserView(BaseModel):
    username: str
    wallet: float
    role: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    token: str
    user: UserView


class WalletOut(BaseModel):
    wallet: float


class MessageOut(BaseModel):
    message: str
