from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database.session import Base

class Producer(Base):
    __tablename__ = "producers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    establishment_name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=False, index=True)
    phone = Column(String, nullable=False)
    cpf = Column(String(11), unique=True, nullable=False, index=True)
    address = Column(String, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash, never plaintext
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    products = relationship(
        "Product",
        back_populates="producer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Producer(id={self.id}, email='{self.email}')>"
