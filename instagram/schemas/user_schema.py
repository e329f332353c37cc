from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base dos schemas expostos na API: campos em camelCase no JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LoginRequest(CamelModel):
    username: str
    password: str


class UserDetailsRequest(CamelModel):
    id: Optional[int] = None
    full_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    def to_dto(self) -> "UserDto":
        return UserDto(
            id=self.id,
            full_name=self.full_name,
            username=self.username,
            email=self.email,
            password=self.password,
        )


class UserDto(CamelModel):
    """
    Visão externa do usuário.

    password só é aceito na entrada e encrypted_password nunca sai do núcleo:
    nenhum dos dois é serializado.
    """
    id: Optional[int] = None
    full_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, exclude=True)
    encrypted_password: Optional[str] = Field(default=None, exclude=True)

    @classmethod
    def from_entity(cls, entity) -> "UserDto":
        return cls(
            id=entity.id,
            full_name=entity.full_name,
            username=entity.username,
            email=entity.email,
        )


class SignInResponse(BaseModel):
    token: str
    username: str
