"""Column types shared by the models"""
from sqlalchemy import TypeDecorator, String
import uuid


def generate_uuid() -> str:
    """New random id as a 36-char string"""
    return str(uuid.uuid4())


class GUID(TypeDecorator):
    """
    UUID ids kept as VARCHAR(36) on every backend.

    Accepts uuid.UUID or str on the way in and always hands back str, so
    API path parameters can be compared against ids without conversion.
    """
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, uuid.UUID):
            return str(value)
        return str(value).lower()

    def process_result_value(self, value, dialect):
        return None if value is None else str(value)
