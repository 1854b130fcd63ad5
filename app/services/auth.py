import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.core.errors import AuthenticationError, ValidationError
from app.core.security import create_access_token, verify_password
from app.models.producer import Producer
from app.repositories.producer import ProducerRepository
from app.schemas.auth import LoginRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


def login(db: Session, credentials: LoginRequest) -> Dict[str, Any]:
    """
    Check a producer's credentials and issue a bearer token.

    Unknown emails and wrong passwords fail with the same message so the
    response does not reveal which accounts exist.
    """
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required.")

    producer = ProducerRepository(db).find_by_email(credentials.email.strip())
    if not producer or not verify_password(credentials.password, producer.password):
        logger.warning("Rejected login attempt")
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    token = create_access_token({"id": producer.id, "name": producer.name})
    logger.info(f"Producer {producer.id} logged in")

    return {
        "message": "Login successful!",
        "producer": producer,
        "token": token,
    }


def confirm_password(producer: Producer, password: str, missing_message: str) -> None:
    """Step-up check: re-verify the caller's current password."""
    if not password:
        raise AuthenticationError(missing_message)
    if not verify_password(password, producer.password):
        logger.warning(f"Wrong current password for producer {producer.id}")
        raise AuthenticationError("Current password is incorrect.")
