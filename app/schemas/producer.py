import re
from datetime import datetime
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, EmailStr, Field, ValidatorFunctionWrapHandler, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError
from validate_docbr import CPF

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)[a-zA-Z\d]{8,}$")
PASSWORD_STRENGTH_MESSAGE = (
    "Password must be at least 8 characters long and contain an uppercase letter, "
    "a lowercase letter and a number."
)

cpf_validator = CPF()


def check_password_strength(password: str) -> str:
    if not PASSWORD_PATTERN.match(password):
        raise ValueError(PASSWORD_STRENGTH_MESSAGE)
    return password


# Registration payload
class ProducerCreate(BaseModel):
    name: str = Field(min_length=1)
    establishment_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("establishmentName", "establishment_name")
    )
    email: EmailStr
    phone: str = Field(min_length=1)
    cpf: str = Field(min_length=1)
    address: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email", mode="wrap")
    @classmethod
    def email_format(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> str:
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise PydanticCustomError("missing", "Field required")
        try:
            return handler(v)
        except PydanticValidationError:
            raise ValueError("Invalid email format.")

    @field_validator("cpf")
    @classmethod
    def cpf_format(cls, v: str) -> str:
        if not cpf_validator.validate(v):
            raise ValueError("Invalid CPF format.")
        return v

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return check_password_strength(v)


# Profile changes; currentPassword is the step-up confirmation
class ProducerUpdate(BaseModel):
    name: Optional[str] = None
    establishment_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("establishmentName", "establishment_name")
    )
    phone: Optional[str] = None
    address: Optional[str] = None
    current_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("currentPassword", "current_password")
    )


class PasswordChange(BaseModel):
    current_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("currentPassword", "current_password")
    )
    new_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("newPassword", "new_password")
    )
    confirm_new_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("confirmNewPassword", "confirm_new_password")
    )


class PasswordConfirmation(BaseModel):
    current_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("currentPassword", "current_password")
    )


# Schema for Producer returned to client (never includes the password)
class ProducerRead(BaseModel):
    id: int
    name: str
    establishment_name: Optional[str] = Field(None, serialization_alias="establishmentName")
    email: str
    phone: str
    cpf: str
    address: str
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


# Public subset of a producer embedded in product responses
class ProducerSummary(BaseModel):
    id: int
    name: str
    establishment_name: Optional[str] = Field(None, serialization_alias="establishmentName")
    phone: str
    email: str

    class Config:
        from_attributes = True


class ProducerEnvelope(BaseModel):
    message: str
    producer: ProducerRead
