from pydantic import BaseModel, ConfigDict, Field

class UserCredentials(BaseModel):
    """Signup and signin request body"""
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)

class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str

class AuthResponse(BaseModel):
    user: UserResponse
    token: str

class Identity(BaseModel):
    """Resolved caller, decoded from a bearer token and confirmed in the store"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
