from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

# Largest integer a store column can hold (SQLite INTEGER is signed 64-bit).
MAX_INT = 2**63 - 1
MIN_INT = -(2**63)

# Request bodies. Fields default so that a missing name reaches the service
# and is reported as a ValidationError, the same as a blank one.

class CategoryIn(BaseModel):
    name: str = ""
    description: Optional[str] = ""

class ProductIn(BaseModel):
    name: str = ""
    # the sign is checked by the service; only the width is bounded here
    price: int = Field(default=0, ge=MIN_INT, le=MAX_INT)
    stock: int = Field(default=0, ge=MIN_INT, le=MAX_INT)
    category_id: Optional[int] = Field(default=0, ge=0, le=MAX_INT)
    # accepted for symmetry with the response shape, ignored
    category_name: Optional[str] = None

def _make_category_dict(c: CategoryIn) -> Dict[str, Any]:
    return {
        "name": c.name,
        "description": c.description or "",
    }

def _make_product_dict(p: ProductIn) -> Dict[str, Any]:
    return {
        "name": p.name,
        "price": p.price,
        "stock": p.stock,
        "category_id": p.category_id or 0,
    }
