# kasir_api/models.py
from pydantic import BaseModel


class Category(BaseModel):
    id: int
    name: str
    description: str = ""


class Product(BaseModel):
    id: int
    name: str
    price: int
    stock: int
    category_id: int = 0
    # Filled in on every read from the category store, never persisted.
    category_name: str = ""
