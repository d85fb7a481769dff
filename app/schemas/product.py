"""
==============================================================================
Product Schemas Module
==============================================================================

Structured product projection returned by GetAllProducts.

==============================================================================
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProductDetail(BaseModel):
    """Product fields by name, serialized with the stored field names."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    price: str
    category: str
    is_active: bool = Field(serialization_alias="isactive")
    expiry_date: Optional[datetime] = Field(default=None, serialization_alias="expiryDate")
    voltage: str
    socket: str

