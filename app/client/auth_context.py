import json
import logging
from typing import Any, Dict, Optional

from keyring.errors import KeyringError

from app.client.api import ApiClient
from app.client.storage import SecureStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "user_token"
USER_KEY = "user_data"
LOGIN_FAILED_MESSAGE = "Invalid email or password."

# Only these producer fields are kept on the device
SESSION_FIELDS = ("id", "name", "email")


class AuthContext:
    """
    Holds the signed-in producer and their token, mirrors them into the
    secure store, and keeps the API client's bearer header in sync.
    """

    def __init__(self, api: ApiClient, store: SecureStore):
        self.api = api
        self.store = store
        self.user: Optional[Dict[str, Any]] = None
        self.token: Optional[str] = None
        self.is_loading = True

    @property
    def is_signed_in(self) -> bool:
        return bool(self.token and self.user)

    @property
    def initial_route(self) -> str:
        return "Main" if self.is_signed_in else "Welcome"

    def load_storage_data(self) -> None:
        """Restore a persisted session at launch."""
        try:
            stored_token = self.store.get_item(TOKEN_KEY)
            stored_user = self.store.get_item(USER_KEY)

            if stored_token and stored_user:
                self.user = json.loads(stored_user)
                self.token = stored_token
                self.api.set_token(stored_token)
        except (KeyringError, ValueError) as e:
            logger.error(f"Failed to load the stored session: {str(e)}")
        finally:
            self.is_loading = False

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        data = await self.api.post(
            "/login",
            json={"email": email, "password": password},
            fallback_message=LOGIN_FAILED_MESSAGE,
        )

        producer = {key: data["producer"].get(key) for key in SESSION_FIELDS}
        self.user = producer
        self.token = data["token"]
        self.api.set_token(self.token)

        self.store.set_item(TOKEN_KEY, self.token)
        self.store.set_item(USER_KEY, json.dumps(producer))
        logger.info(f"Signed in as producer {producer['id']}")
        return producer

    def sign_out(self) -> None:
        try:
            self.store.delete_item(TOKEN_KEY)
            self.store.delete_item(USER_KEY)
        except KeyringError as e:
            logger.error(f"Failed to clear the stored session: {str(e)}")
        self.api.clear_token()
        self.user = None
        self.token = None
