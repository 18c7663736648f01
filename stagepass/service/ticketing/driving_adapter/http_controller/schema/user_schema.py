"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import EmailStr, Field, SecretStr

from stagepass.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=72,
        description='Password must be 8-72 characters (bcrypt limit)',
    )
    organizer: bool = False

    model_config = CamelModel.model_config | {
        'json_schema_extra': {
            'example': {
                'username': 'taylor',
                'email': 'taylor@example.com',
                'password': 'P@ssw0rd',
                'organizer': False,
            }
        }
    }


class LoginRequest(CamelModel):
    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)

    model_config = CamelModel.model_config | {
        'json_schema_extra': {'example': {'email': 'taylor@example.com', 'password': 'P@ssw0rd'}}
    }


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    organizer: bool


class LoginResponse(CamelModel):
    message: str = 'Login successful'
    token: str
    token_type: str = 'bearer'
    username: str
    organizer: bool
