import logging
from typing import Optional

import keyring
from keyring.errors import PasswordDeleteError

from app.client.config import ClientSettings

logger = logging.getLogger(__name__)


class SecureStore:
    """
    Session key/value storage backed by the operating system keyring,
    with every key kept under one service name.
    """

    def __init__(self, service_name: Optional[str] = None):
        self.service_name = service_name or ClientSettings().KEYRING_SERVICE

    def get_item(self, key: str) -> Optional[str]:
        return keyring.get_password(self.service_name, key)

    def set_item(self, key: str, value: str) -> None:
        keyring.set_password(self.service_name, key, value)

    def delete_item(self, key: str) -> None:
        try:
            keyring.delete_password(self.service_name, key)
        except PasswordDeleteError:
            logger.debug(f"Nothing stored under {key}")
