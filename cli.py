# cli.py
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import requests

from sdk.pykasir import KasirClient, DEFAULT_BASE_URL

console = Console()
c = KasirClient(base_url=DEFAULT_BASE_URL)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
category_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def format_price(amount: int) -> str:
    return f"Rp {amount:,}".replace(",", ".")


def show_categories(categories: List[Dict[str, Any]]):
    if not categories:
        console.print("[italic yellow]No categories found[/italic yellow]")
        return

    table = Table(
        title="🏷️ Categories",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Description", width=40)

    for cat in categories:
        table.add_row(
            str(cat.get("id", "N/A")),
            cat.get("name", "N/A"),
            cat.get("description") or "-"
        )
    console.print(table)


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=16)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=20)

    for p in products:
        category = p.get("category_name") or "[dim]-[/dim]"
        stock = p.get("stock", 0)
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            format_price(p.get("price", 0)),
            str(stock) if stock > 0 else f"[red]{stock}[/red]",
            category
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with error reporting
# ---------------------------
def _error_detail(e: Exception) -> str:
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            return f"HTTP {e.response.status_code}: {e.response.json().get('detail', e.response.text)}"
        except ValueError:
            return f"HTTP {e.response.status_code}: {e.response.text}"
    return str(e)


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after reporting the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except (requests.exceptions.RequestException, ValueError) as e:
        status_message = f"Error: {_error_detail(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_caches():
    global product_cache, category_cache
    product_cache = try_api(c.list_products) or []
    category_cache = try_api(c.list_categories) or []


def get_product_completer():
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    ids = [str(cat.get("id", "")) for cat in category_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🧾 Kasir SDK",
        "[bold blue]Point-of-Sale Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_id(message: str, completer=None) -> Optional[int]:
    raw = prompt_with_autocomplete(message, completer=completer).strip()
    try:
        return int(raw)
    except ValueError:
        console.print(f"[red]'{raw}' is not a valid id.[/red]")
        return None


def ask_category_fields(current: Optional[Dict[str, Any]] = None):
    current = current or {}
    name = prompt_with_autocomplete("🏷️ Category name", default=current.get("name", ""))
    description = Prompt.ask("📝 Description", default=current.get("description", ""))
    return name, description


def ask_product_fields(current: Optional[Dict[str, Any]] = None):
    current = current or {}
    name = prompt_with_autocomplete("📦 Product name", default=current.get("name", ""))
    price = IntPrompt.ask("💰 Price", default=current.get("price", 0))
    stock = IntPrompt.ask("📦 Stock", default=current.get("stock", 0))
    if category_cache:
        show_categories(category_cache)
    category_id = IntPrompt.ask("🏷️ Category ID (0 for none)", default=current.get("category_id", 0))
    return name, price, stock, category_id


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache, category_cache

    console.clear()
    console.print(create_header())

    # Preload ids for autocomplete
    refresh_caches()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "🏷️ List categories", "6", "📦 List products"),
            ("2", "ℹ️ Get category by ID", "7", "ℹ️ Get product by ID"),
            ("3", "➕ Create category", "8", "➕ Create product"),
            ("4", "✏️ Update category", "9", "✏️ Update product"),
            ("5", "🗑️ Delete category", "10", "🗑️ Delete product"),
            ("11", "🔄 Reset store", "q", "👋 Quit"),
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 12)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            categories = try_api(c.list_categories, success_msg="Categories loaded")
            if categories is not None:
                category_cache = categories
                show_categories(categories)

        elif choice == "2":
            cid = ask_id("Enter category ID", completer=get_category_completer())
            if cid is not None:
                resp = try_api(c.get_category, cid, success_msg=f"Category {cid} loaded")
                if resp:
                    show_categories([resp])

        elif choice == "3":
            name, description = ask_category_fields()
            resp = try_api(c.create_category, name, description,
                           success_msg=f"Category '{name}' created")
            if resp:
                show_categories([resp])
                category_cache = try_api(c.list_categories) or []

        elif choice == "4":
            cid = ask_id("Enter category ID", completer=get_category_completer())
            current = try_api(c.get_category, cid) if cid is not None else None
            if current:
                name, description = ask_category_fields(current)
                resp = try_api(c.update_category, cid, name, description,
                               success_msg=f"Category {cid} updated")
                if resp:
                    show_categories([resp])
                    category_cache = try_api(c.list_categories) or []

        elif choice == "5":
            cid = ask_id("Enter category ID", completer=get_category_completer())
            if cid is not None and Confirm.ask(f"Delete category {cid}? Products keep their category id."):
                resp = try_api(c.delete_category, cid, success_msg=f"Category {cid} deleted")
                if resp:
                    category_cache = try_api(c.list_categories) or []

        elif choice == "6":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "7":
            pid = ask_id("Enter product ID", completer=get_product_completer())
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
                if resp:
                    show_products([resp])

        elif choice == "8":
            name, price, stock, category_id = ask_product_fields()
            resp = try_api(c.create_product, name, price, stock, category_id,
                           success_msg=f"Product '{name}' created")
            if resp:
                show_products([resp])
                product_cache = try_api(c.list_products) or []

        elif choice == "9":
            pid = ask_id("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid) if pid is not None else None
            if current:
                name, price, stock, category_id = ask_product_fields(current)
                resp = try_api(c.update_product, pid, name, price, stock, category_id,
                               success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp])
                    product_cache = try_api(c.list_products) or []

        elif choice == "10":
            pid = ask_id("Enter product ID", completer=get_product_completer())
            if pid is not None and Confirm.ask(f"Delete product {pid}?"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    product_cache = try_api(c.list_products) or []

        elif choice == "11":
            if Confirm.ask("[red]This will clear all data. Continue?[/red]"):
                resp = try_api(c.reset, success_msg="Store reset successfully")
                console.print(resp)
                product_cache = []
                category_cache = []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Terima kasih! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
