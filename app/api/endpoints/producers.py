from typing import Optional
from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_producer
from app.database.session import get_db
from app.schemas.auth import TokenPayload
from app.schemas.producer import (
    PasswordChange,
    PasswordConfirmation,
    ProducerCreate,
    ProducerEnvelope,
    ProducerRead,
    ProducerUpdate,
)
from app.services import producers as producer_service

router = APIRouter()

@router.post("", response_model=ProducerEnvelope, status_code=status.HTTP_201_CREATED)
def register_producer(data: ProducerCreate, db: Session = Depends(get_db)):
    """Register a new producer account."""
    producer = producer_service.register_producer(db, data)
    return {"message": "Producer registered successfully!", "producer": producer}

@router.get("/{producer_id}", response_model=ProducerRead)
def get_producer(
    producer_id: int,
    db: Session = Depends(get_db),
    current_producer: TokenPayload = Depends(get_current_producer)
):
    """Get a producer by ID. The password is never part of the response."""
    return producer_service.get_producer(db, producer_id)

@router.put("/{producer_id}", response_model=ProducerEnvelope)
def update_producer(
    producer_id: int,
    data: ProducerUpdate,
    db: Session = Depends(get_db),
    current_producer: TokenPayload = Depends(get_current_producer)
):
    """Update the caller's own profile; requires currentPassword."""
    producer = producer_service.update_producer(db, producer_id, data, current_producer)
    return {"message": "Profile updated successfully!", "producer": producer}

@router.put("/{producer_id}/password")
def change_password(
    producer_id: int,
    data: PasswordChange,
    db: Session = Depends(get_db),
    current_producer: TokenPayload = Depends(get_current_producer)
):
    """Change the caller's own password."""
    producer_service.change_password(db, producer_id, data, current_producer)
    return {"message": "Password changed successfully!"}

@router.delete("/{producer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_producer(
    producer_id: int,
    data: Optional[PasswordConfirmation] = Body(None),
    db: Session = Depends(get_db),
    current_producer: TokenPayload = Depends(get_current_producer)
):
    """Delete the caller's own account and all of its products."""
    current_password = data.current_password if data else None
    producer_service.delete_producer(db, producer_id, current_password, current_producer)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
