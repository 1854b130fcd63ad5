import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from app.models.producer import Producer
from app.repositories.base import ConstraintViolationError
from app.repositories.producer import ProducerRepository
from app.schemas.auth import TokenPayload
from app.schemas.producer import (
    PASSWORD_PATTERN,
    PASSWORD_STRENGTH_MESSAGE,
    PasswordChange,
    ProducerCreate,
    ProducerUpdate,
)
from app.services.auth import confirm_password
from app.utils.cpf import clean_cpf

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Email or CPF already registered."
NOT_FOUND_MESSAGE = "Producer not found."


def register_producer(db: Session, data: ProducerCreate) -> Producer:
    """Create a producer account after checking email and CPF are free."""
    repository = ProducerRepository(db)
    cpf = clean_cpf(data.cpf)

    if repository.find_by_email_or_cpf(data.email, cpf):
        raise ValidationError(DUPLICATE_MESSAGE)

    try:
        producer = repository.insert({
            "name": data.name,
            "establishment_name": data.establishment_name,
            "email": data.email,
            "phone": data.phone,
            "cpf": cpf,
            "address": data.address,
            "password": data.password,
        })
    except ConstraintViolationError:
        # lost a race with a concurrent registration
        raise ValidationError(DUPLICATE_MESSAGE)

    logger.info(f"Producer {producer.id} registered")
    return producer


def get_producer(db: Session, producer_id: int) -> Producer:
    producer = ProducerRepository(db).find_by_id(producer_id)
    if not producer:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return producer


def _get_own_producer(db: Session, producer_id: int, identity: TokenPayload) -> Producer:
    producer = get_producer(db, producer_id)
    if producer.id != identity.id:
        logger.warning(f"Producer {identity.id} tried to modify producer {producer_id}")
        raise PermissionDeniedError("You can only change your own account.")
    return producer


def update_producer(db: Session, producer_id: int, data: ProducerUpdate, identity: TokenPayload) -> Producer:
    """Apply profile changes once the current password has been confirmed."""
    producer = _get_own_producer(db, producer_id, identity)
    confirm_password(
        producer,
        data.current_password,
        "Current password is required to change the profile.",
    )

    updates: Dict[str, Any] = {}
    if data.name:
        updates["name"] = data.name
    if data.establishment_name is not None:
        updates["establishment_name"] = data.establishment_name
    if data.phone:
        updates["phone"] = data.phone
    if data.address:
        updates["address"] = data.address

    producer = ProducerRepository(db).update(producer, updates)
    logger.info(f"Producer {producer.id} updated profile fields {sorted(updates)}")
    return producer


def change_password(db: Session, producer_id: int, data: PasswordChange, identity: TokenPayload) -> None:
    if not data.current_password or not data.new_password or not data.confirm_new_password:
        raise ValidationError("All fields are required to change the password.")
    if data.new_password != data.confirm_new_password:
        raise ValidationError("New password and confirmation do not match.")
    if not PASSWORD_PATTERN.match(data.new_password):
        raise ValidationError(PASSWORD_STRENGTH_MESSAGE)

    producer = _get_own_producer(db, producer_id, identity)
    confirm_password(producer, data.current_password, "Current password is required.")

    ProducerRepository(db).update(producer, {"password": data.new_password})
    logger.info(f"Producer {producer.id} changed password")


def delete_producer(db: Session, producer_id: int, current_password: str, identity: TokenPayload) -> None:
    """Delete an account (and its products) after confirming the password."""
    producer = _get_own_producer(db, producer_id, identity)
    confirm_password(producer, current_password, "Current password is required to delete the account.")

    ProducerRepository(db).delete(producer)
    logger.info(f"Producer {producer_id} deleted")
