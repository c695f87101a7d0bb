# interactive catalog admin console
import json
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog.config import get_settings
from catalog.models import Product
from sdk.pycatalog import CatalogClient

console = Console()
c = CatalogClient(base_url=f"http://127.0.0.1:{get_settings().PORT}")

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Product] = []

EDITABLE_FIELDS = [
    "name", "category", "category_name", "short_description", "price_from",
    "material", "finish", "technology", "size_mm", "packaging", "badges", "extra_text",
]

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Product]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Product Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=16)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Category", width=24)
    table.add_column("Price from", justify="right", width=10)
    table.add_column("Images", justify="right", width=6)

    for p in products:
        table.add_row(
            str(p.id),
            p.name or "-",
            f"{p.category} / {p.category_name or '-'}",
            "-" if p.price_from is None else str(p.price_from),
            str(len(p.images)),
        )
    console.print(table)


def show_product(p: Product):
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Field", style="bold cyan", width=18)
    table.add_column("Value")
    for key, value in p.model_dump(exclude_none=True).items():
        if key == "images":
            value = "\n".join(value) or "-"
        table.add_row(key, str(value))
    console.print(Panel(table, title=f"🏷️ {p.id}", border_style="cyan"))


def show_categories(categories: Dict[str, str]):
    if not categories:
        console.print("[italic yellow]No categories yet[/italic yellow]")
        return
    table = Table(box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Slug", style="bold")
    table.add_column("Name")
    for slug, label in categories.items():
        table.add_row(slug, str(label))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Failures (HTTP errors, unreadable image files) end up in the status panel
    and None is returned.
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
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Input helpers
# ---------------------------
def get_product_completer():
    return WordCompleter([str(p.id) for p in product_cache], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def parse_value(raw: str) -> Any:
    # numbers, booleans and null are typed; everything else stays text
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def ask_fields(existing: Optional[Product] = None) -> Dict[str, Any]:
    current = existing.model_dump() if existing else {}
    fields: Dict[str, Any] = {}
    for key in EDITABLE_FIELDS:
        old = current.get(key)
        raw = Prompt.ask(f"{key}", default="" if old is None else str(old))
        if raw == ("" if old is None else str(old)):
            continue
        fields[key] = parse_value(raw) if raw else None
    return fields


def ask_images() -> List[str]:
    raw = prompt_with_autocomplete("Image files (space separated, empty for none)")
    return raw.split()


def refresh_cache():
    global product_cache
    product_cache = try_api(c.list_products) or []


def create_header():
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return Panel(
        f"🛋️ [bold blue]Catalog admin[/bold blue]  [dim]{c.base_url}  {now}[/dim]",
        style="bold blue",
    )


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "🖼️ Upload images"),
            ("2", "ℹ️ Show product", "6", "🗑️ Delete product"),
            ("3", "➕ Add product", "7", "🏷️ Categories"),
            ("4", "✏️ Edit product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache[:] = products
                show_products(products)

        elif choice == "2":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            p = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if p:
                show_product(p)

        elif choice == "3":
            fields = ask_fields()
            pid = prompt_with_autocomplete("Product ID (empty to generate)").strip()
            if pid:
                fields["id"] = pid
            p = try_api(c.create_product, fields, ask_images(), success_msg="Product created")
            if p:
                show_product(p)
                refresh_cache()

        elif choice == "4":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            existing = try_api(c.get_product, pid)
            if existing:
                fields = ask_fields(existing)
                if not fields:
                    status_message = "Nothing to change"
                else:
                    p = try_api(c.update_product, pid, fields, success_msg=f"Product {pid} updated")
                    if p:
                        show_product(p)

        elif choice == "5":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            paths = ask_images()
            if paths:
                p = try_api(c.update_product, pid, {}, paths, success_msg=f"Images added to {pid}")
                if p:
                    show_product(p)

        elif choice == "6":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete {pid}?[/red]"):
                if try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted") is not None:
                    refresh_cache()

        elif choice == "7":
            categories = try_api(c.categories, success_msg="Categories loaded")
            if categories is not None:
                show_categories(categories)

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye 👋[/bold green]", title="Goodbye"))
            sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
