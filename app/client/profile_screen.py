from typing import Any, Dict, Optional

from app.client.api import ApiClient, ApiError
from app.client.auth_context import AuthContext


class ProfileScreen:
    """Shows the signed-in producer and lets them edit profile or password."""

    def __init__(self, api: ApiClient, auth: AuthContext):
        self.api = api
        self.auth = auth
        self.producer: Optional[Dict[str, Any]] = None

    def _producer_url(self) -> str:
        if not self.auth.user:
            raise ApiError("You need to sign in first.")
        return f"/producers/{self.auth.user['id']}"

    async def fetch_producer(self) -> Dict[str, Any]:
        self.producer = await self.api.get(
            self._producer_url(), fallback_message="Could not load the profile."
        )
        return self.producer

    async def update_profile(self, current_password: str, **changes: Any) -> Dict[str, Any]:
        payload = {key: value for key, value in changes.items() if value is not None}
        payload["currentPassword"] = current_password
        data = await self.api.put(
            self._producer_url(), json=payload, fallback_message="Could not update the profile."
        )
        self.producer = data["producer"]
        return self.producer

    async def change_password(self, current_password: str, new_password: str, confirm_new_password: str) -> str:
        data = await self.api.put(
            f"{self._producer_url()}/password",
            json={
                "currentPassword": current_password,
                "newPassword": new_password,
                "confirmNewPassword": confirm_new_password,
            },
            fallback_message="Could not change the password.",
        )
        return data["message"]

    def sign_out(self) -> None:
        self.auth.sign_out()
        self.producer = None
