import asyncio
import copy
import logging
import sqlite3
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from .config import Settings
from .core import MAX_INT, MIN_INT
from .errors import StoreError

# Record stores, one per collection. Every operation on a collection runs
# under that collection's lock, reads included.

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class Store(Protocol):
    async def get_all(self) -> List[Record]: ...
    async def get_by_id(self, record_id: int) -> Optional[Record]: ...
    async def insert(self, record: Record) -> Record: ...
    async def replace(self, record_id: int, record: Record) -> Optional[Record]: ...
    async def remove(self, record_id: int) -> bool: ...
    async def clear(self) -> None: ...


class InMemoryStore:
    """Dict-backed collection. Ids come from a counter and are never reused."""

    def __init__(self, name: str):
        self.name = name
        self._records: Dict[int, Record] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def get_all(self) -> List[Record]:
        async with self._lock:
            return [copy.deepcopy(self._records[k]) for k in sorted(self._records)]

    async def get_by_id(self, record_id: int) -> Optional[Record]:
        async with self._lock:
            rec = self._records.get(record_id)
            return copy.deepcopy(rec) if rec is not None else None

    async def insert(self, record: Record) -> Record:
        async with self._lock:
            record_id = self._next_id
            self._next_id += 1
            stored = {**copy.deepcopy(record), "id": record_id}
            self._records[record_id] = stored
            return copy.deepcopy(stored)

    async def replace(self, record_id: int, record: Record) -> Optional[Record]:
        async with self._lock:
            if record_id not in self._records:
                return None
            stored = {**copy.deepcopy(record), "id": record_id}
            self._records[record_id] = stored
            return copy.deepcopy(stored)

    async def remove(self, record_id: int) -> bool:
        async with self._lock:
            return self._records.pop(record_id, None) is not None

    async def clear(self) -> None:
        async with self._lock:
            self._records.clear()
            self._next_id = 1


# ---------------------------
# SQLite (table-backed)
# ---------------------------
TABLES: Dict[str, Tuple[str, Sequence[str]]] = {
    "categories": (
        """
        CREATE TABLE IF NOT EXISTS categories (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT ''
        )
        """,
        ("name", "description"),
    ),
    "products": (
        """
        CREATE TABLE IF NOT EXISTS products (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            price INTEGER NOT NULL DEFAULT 0,
            stock INTEGER NOT NULL DEFAULT 0,
            category_id INTEGER NOT NULL DEFAULT 0
        )
        """,
        ("name", "price", "stock", "category_id"),
    ),
}


def _storable(record_id: int) -> bool:
    # ids outside the INTEGER range cannot exist in a table
    return MIN_INT <= record_id <= MAX_INT


class SqliteStore:
    """
    One SQLite table per collection, a fresh connection per operation.
    No foreign key on products.category_id: a product may point at a
    category that does not exist.
    """

    def __init__(self, path: str, table: str):
        if table not in TABLES:
            raise ValueError(f"unknown table: {table}")
        self.path = path
        self.name = table
        self._columns = tuple(TABLES[table][1])
        self._lock = asyncio.Lock()
        self._execute(TABLES[table][0])

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, sql: str, params: Sequence[Any] = (), fetch: str = "none"):
        try:
            conn = self._connect()
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {self.path}: {e}") from e
        try:
            cur = conn.execute(sql, tuple(params))
            if fetch == "all":
                result = [dict(row) for row in cur.fetchall()]
            elif fetch == "one":
                row = cur.fetchone()
                result = dict(row) if row is not None else None
            elif fetch == "lastrowid":
                result = cur.lastrowid
            else:
                result = cur.rowcount
            conn.commit()
            return result
        except (sqlite3.Error, OverflowError) as e:
            logger.error("SQLite error on %s: %s", self.name, e)
            raise StoreError(f"{self.name}: {e}") from e
        finally:
            conn.close()

    def _select(self) -> str:
        return f"SELECT id, {', '.join(self._columns)} FROM {self.name}"

    def _values(self, record: Record) -> List[Any]:
        return [record.get(col) for col in self._columns]

    async def get_all(self) -> List[Record]:
        async with self._lock:
            return self._execute(f"{self._select()} ORDER BY id", fetch="all")

    async def get_by_id(self, record_id: int) -> Optional[Record]:
        if not _storable(record_id):
            return None
        async with self._lock:
            return self._execute(f"{self._select()} WHERE id = ?", (record_id,), fetch="one")

    async def insert(self, record: Record) -> Record:
        cols = ", ".join(self._columns)
        marks = ", ".join("?" for _ in self._columns)
        async with self._lock:
            record_id = self._execute(
                f"INSERT INTO {self.name} ({cols}) VALUES ({marks})",
                self._values(record),
                fetch="lastrowid",
            )
            return self._execute(f"{self._select()} WHERE id = ?", (record_id,), fetch="one")

    async def replace(self, record_id: int, record: Record) -> Optional[Record]:
        assignments = ", ".join(f"{col} = ?" for col in self._columns)
        if not _storable(record_id):
            return None
        async with self._lock:
            affected = self._execute(
                f"UPDATE {self.name} SET {assignments} WHERE id = ?",
                [*self._values(record), record_id],
            )
            if not affected:
                return None
            return self._execute(f"{self._select()} WHERE id = ?", (record_id,), fetch="one")

    async def remove(self, record_id: int) -> bool:
        if not _storable(record_id):
            return False
        async with self._lock:
            return self._execute(f"DELETE FROM {self.name} WHERE id = ?", (record_id,)) > 0

    async def clear(self) -> None:
        async with self._lock:
            self._execute(f"DELETE FROM {self.name}")
            self._execute("DELETE FROM sqlite_sequence WHERE name = ?", (self.name,))


class Database:
    """The two collections the services work against."""

    def __init__(self, categories: Store, products: Store):
        self.categories = categories
        self.products = products

    async def clear(self) -> None:
        await self.products.clear()
        await self.categories.clear()


def build_database(settings: Settings) -> Database:
    if settings.database_path:
        logger.info("Using SQLite store at %s", settings.database_path)
        return Database(
            categories=SqliteStore(settings.database_path, "categories"),
            products=SqliteStore(settings.database_path, "products"),
        )
    logger.info("Using in-memory store")
    return Database(categories=InMemoryStore("categories"), products=InMemoryStore("products"))
