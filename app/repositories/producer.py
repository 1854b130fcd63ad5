from typing import Any, Dict, Optional

from sqlalchemy import or_

from app.core.security import hash_password
from app.models.producer import Producer
from app.repositories.base import Repository


class ProducerRepository(Repository[Producer]):
    model = Producer

    def find_by_email(self, email: str) -> Optional[Producer]:
        return self._query().filter(Producer.email == email).first()

    def find_by_email_or_cpf(self, email: str, cpf: str) -> Optional[Producer]:
        return self._query().filter(or_(Producer.email == email, Producer.cpf == cpf)).first()

    def insert(self, values: Dict[str, Any]) -> Producer:
        return super().insert(self._hash_password(values))

    def update(self, record: Producer, values: Dict[str, Any]) -> Producer:
        return super().update(record, self._hash_password(values))

    @staticmethod
    def _hash_password(values: Dict[str, Any]) -> Dict[str, Any]:
        # passwords are only ever written hashed
        if values.get("password"):
            values = dict(values)
            values["password"] = hash_password(values["password"])
        return values
