from typing import Any, Dict

from app.client.api import ApiClient, ApiError
from app.schemas.producer import PASSWORD_PATTERN, PASSWORD_STRENGTH_MESSAGE, cpf_validator

REQUIRED_FIELDS = ("name", "email", "phone", "cpf", "address", "password")


class RegisterScreen:
    """Sign-up form; checks what it can locally before calling the API."""

    def __init__(self, api: ApiClient):
        self.api = api

    def validate(self, form: Dict[str, Any]) -> None:
        if any(not form.get(field) for field in REQUIRED_FIELDS):
            raise ApiError("Please fill in all required fields.")
        if not cpf_validator.validate(form["cpf"]):
            raise ApiError("The CPF entered is invalid.")
        if form["password"] != form.get("confirmPassword"):
            raise ApiError("Passwords do not match.")
        if not PASSWORD_PATTERN.match(form["password"]):
            raise ApiError(PASSWORD_STRENGTH_MESSAGE)

    async def submit(self, form: Dict[str, Any]) -> Dict[str, Any]:
        self.validate(form)
        payload = {field: form[field] for field in REQUIRED_FIELDS}
        if form.get("establishmentName"):
            payload["establishmentName"] = form["establishmentName"]
        data = await self.api.post(
            "/producers", json=payload, fallback_message="A server error occurred."
        )
        return data["producer"]
