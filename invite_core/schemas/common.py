"""
Common Pydantic schemas
"""

from typing import Any, Generic, List, Literal, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

class StandardResponse(BaseModel):
    """Standard API response"""
    success: bool
    message: str
    data: Optional[Any] = None

class ErrorResponse(BaseModel):
    """Error response schema"""
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

class Page(BaseModel, Generic[T]):
    """One page of a newest-first listing"""
    items: List[T]
    total: int
    page: int
    page_size: int

class IdRef(BaseModel):
    """Reference carrying only the target id"""
    kind: Literal["id"] = "id"
    id: str

class ExpandedRef(BaseModel, Generic[T]):
    """Reference carrying the resolved target"""
    kind: Literal["expanded"] = "expanded"
    value: T
