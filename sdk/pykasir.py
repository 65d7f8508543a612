# sdk/pykasir.py
import os
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print

DEFAULT_BASE_URL = os.getenv("KASIR_API_URL", "http://localhost:8085")

class KasirClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 10, session: Optional[Any] = None,
                 prefix: str = "/api", async_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{prefix}"
        # anything with requests' get/post/put/delete surface works, e.g. a TestClient
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        # used by the async helpers; None means real network I/O
        self.async_transport = async_transport

    def _get(self, path: str):
        r = self.session.get(f"{self.api_url}{path}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None):
        r = getattr(self.session, method)(f"{self.api_url}{path}", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def reset(self):
        r = self.session.post(f"{self.api_url}/reset", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Categories
    def list_categories(self):
        return self._get("/categories")

    def get_category(self, category_id: int):
        return self._get(f"/categories/{category_id}")

    def create_category(self, name: str, description: str = ""):
        return self._send("post", "/categories", {"name": name, "description": description})

    def update_category(self, category_id: int, name: str, description: str = ""):
        return self._send("put", f"/categories/{category_id}", {"name": name, "description": description})

    def delete_category(self, category_id: int):
        r = self.session.delete(f"{self.api_url}/categories/{category_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products
    def list_products(self):
        return self._get("/products")

    def get_product(self, product_id: int):
        return self._get(f"/products/{product_id}")

    def create_product(self, name: str, price: int, stock: int, category_id: int = 0):
        return self._send("post", "/products", {
            "name": name, "price": price, "stock": stock, "category_id": category_id
        })

    def update_product(self, product_id: int, name: str, price: int, stock: int, category_id: int = 0):
        return self._send("put", f"/products/{product_id}", {
            "name": name, "price": price, "stock": stock, "category_id": category_id
        })

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.api_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async listing (example)
    async def list_products_async(self):
        async with httpx.AsyncClient(transport=self.async_transport, timeout=self.timeout) as client:
            r = await client.get(f"{self.api_url}/products")
            r.raise_for_status()
            return r.json()


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Kasir API CLI")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Category commands
    # ---------------------------
    subparsers.add_parser("list-categories", help="List all categories")

    gc = subparsers.add_parser("get-category", help="Get a category by its ID")
    gc.add_argument("--id", type=int, required=True, help="Category ID")

    cc = subparsers.add_parser("create-category", help="Create a category")
    cc.add_argument("--name", required=True)
    cc.add_argument("--description", default="")

    uc = subparsers.add_parser("update-category", help="Replace a category")
    uc.add_argument("--id", type=int, required=True)
    uc.add_argument("--name", required=True)
    uc.add_argument("--description", default="")

    dc = subparsers.add_parser("delete-category", help="Delete a category")
    dc.add_argument("--id", type=int, required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--id", type=int, required=True, help="Product ID")

    for cmd, help_text in (("create-product", "Create a product"), ("update-product", "Replace a product")):
        p = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            p.add_argument("--id", type=int, required=True)
        p.add_argument("--name", required=True)
        p.add_argument("--price", type=int, required=True, help="Price in whole currency units")
        p.add_argument("--stock", type=int, required=True)
        p.add_argument("--category-id", type=int, default=0)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--id", type=int, required=True)

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args(argv)
    c = KasirClient(base_url=args.base_url)

    if args.command == "list-categories":
        print(c.list_categories())
    elif args.command == "get-category":
        print(c.get_category(args.id))
    elif args.command == "create-category":
        print(c.create_category(args.name, args.description))
    elif args.command == "update-category":
        print(c.update_category(args.id, args.name, args.description))
    elif args.command == "delete-category":
        print(c.delete_category(args.id))
    elif args.command == "list-products":
        print(c.list_products())
    elif args.command == "get-product":
        print(c.get_product(args.id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.price, args.stock, args.category_id))
    elif args.command == "update-product":
        print(c.update_product(args.id, args.name, args.price, args.stock, args.category_id))
    elif args.command == "delete-product":
        print(c.delete_product(args.id))


if __name__ == "__main__":
    main()
