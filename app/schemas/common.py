from typing import Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

class Envelope(BaseModel, Generic[T]):
    """Successful response wrapper: {"success": true, "data": ...}."""
    success: bool = True
    data: T
