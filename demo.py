#!/usr/bin/env python
import requests
from sdk.pykasir import KasirClient, DEFAULT_BASE_URL

def main():
    c = KasirClient(base_url=DEFAULT_BASE_URL)

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    c.reset()

    # -----------------------------
    # Categories
    # -----------------------------
    print("\nCreating categories...")
    electronics = c.create_category("Electronics", "Gadgets and devices")
    drinks = c.create_category("Minuman", "Produk minuman")
    print(electronics)
    print(drinks)

    # -----------------------------
    # Products
    # -----------------------------
    print("\nCreating products...")
    laptop = c.create_product("Laptop", 15000000, 10, electronics["id"])
    water = c.create_product("Vit 1000ml", 3000, 40, drinks["id"])
    mystery = c.create_product("Mystery", 0, 0, 999)
    print(laptop)
    print(water)
    print(mystery)

    print("\nListing products (category names joined at read time)...")
    print(c.list_products())

    # -----------------------------
    # Delete a category still in use
    # -----------------------------
    print(f"\nDeleting category {electronics['id']} while the laptop still references it...")
    print(c.delete_category(electronics["id"]))
    print(c.get_product(laptop["id"]))

    # -----------------------------
    # Error cases
    # -----------------------------
    print("\nFetching a category that does not exist...")
    try:
        c.get_category(999)
    except requests.exceptions.HTTPError as e:
        print(f"{e.response.status_code}: {e.response.json()}")

    print("\nBlanking the laptop's name...")
    try:
        c.update_product(laptop["id"], "", 15000000, 10, electronics["id"])
    except requests.exceptions.HTTPError as e:
        print(f"{e.response.status_code}: {e.response.json()}")
    print(c.get_product(laptop["id"]))

if __name__ == "__main__":
    main()
