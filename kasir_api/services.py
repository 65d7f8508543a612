import logging
from typing import Any, Dict, List

from .core import CategoryIn, ProductIn, _make_category_dict, _make_product_dict
from .database import Store
from .errors import NotFoundError, ValidationError
from .models import Category, Product

# Business rules for categories and products. Services raise the error kinds
# from errors.py; turning them into status codes is the handlers' job.

logger = logging.getLogger(__name__)


def _require_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError("name is required")


# ---------------------------
# Categories
# ---------------------------
class CategoryService:
    def __init__(self, store: Store):
        self.store = store

    async def get_all(self) -> List[Category]:
        return [Category(**rec) for rec in await self.store.get_all()]

    async def get_by_id(self, category_id: int) -> Category:
        rec = await self.store.get_by_id(category_id)
        if rec is None:
            raise NotFoundError("category", category_id)
        return Category(**rec)

    async def create(self, payload: CategoryIn) -> Category:
        _require_name(payload.name)
        rec = await self.store.insert(_make_category_dict(payload))
        logger.info("Created category %s", rec["id"])
        return Category(**rec)

    async def update(self, category_id: int, payload: CategoryIn) -> Category:
        # unknown id wins over a bad body
        await self.get_by_id(category_id)
        _require_name(payload.name)
        rec = await self.store.replace(category_id, _make_category_dict(payload))
        if rec is None:
            raise NotFoundError("category", category_id)
        logger.info("Updated category %s", category_id)
        return Category(**rec)

    async def delete(self, category_id: int) -> None:
        # Products keep their category_id; their category_name goes blank on the next read.
        if not await self.store.remove(category_id):
            raise NotFoundError("category", category_id)
        logger.info("Deleted category %s", category_id)


# ---------------------------
# Products
# ---------------------------
class ProductService:
    """
    CRUD over products. Every product handed out is enriched with the
    current name of its category, looked up at read time; a missing
    category (or category_id 0) gives an empty name.
    """

    def __init__(self, store: Store, categories: Store):
        self.store = store
        self.categories = categories

    async def _enrich(self, rec: Dict[str, Any]) -> Product:
        category_name = ""
        category_id = rec.get("category_id") or 0
        if category_id:
            category = await self.categories.get_by_id(category_id)
            if category is not None:
                category_name = category["name"]
        return Product(**{**rec, "category_name": category_name})

    @staticmethod
    def _validate(payload: ProductIn) -> None:
        _require_name(payload.name)
        if payload.price < 0:
            raise ValidationError("price must be >= 0")
        if payload.stock < 0:
            raise ValidationError("stock must be >= 0")

    async def get_all(self) -> List[Product]:
        return [await self._enrich(rec) for rec in await self.store.get_all()]

    async def get_by_id(self, product_id: int) -> Product:
        rec = await self.store.get_by_id(product_id)
        if rec is None:
            raise NotFoundError("product", product_id)
        return await self._enrich(rec)

    async def create(self, payload: ProductIn) -> Product:
        self._validate(payload)
        rec = await self.store.insert(_make_product_dict(payload))
        logger.info("Created product %s", rec["id"])
        return await self._enrich(rec)

    async def update(self, product_id: int, payload: ProductIn) -> Product:
        if await self.store.get_by_id(product_id) is None:
            raise NotFoundError("product", product_id)
        self._validate(payload)
        rec = await self.store.replace(product_id, _make_product_dict(payload))
        if rec is None:
            raise NotFoundError("product", product_id)
        logger.info("Updated product %s", product_id)
        return await self._enrich(rec)

    async def delete(self, product_id: int) -> None:
        if not await self.store.remove(product_id):
            raise NotFoundError("product", product_id)
        logger.info("Deleted product %s", product_id)
