# cli.py - interactive catalog manager
import asyncio
import sys
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog.config import get_settings
from catalog.errors import CatalogError
from catalog.log import configure_logging
from catalog.models import LoadingState, Product
from catalog.store import CatalogStore
from catalog.views import FORM_FIELDS, ProductFormView, ProductListView
from sdk.fakestore import AsyncFakeStoreClient

console = Console()
session: Optional[PromptSession] = None

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

STATE_STYLES = {
    LoadingState.IDLE: "dim",
    LoadingState.LOADING: "yellow",
    LoadingState.SUCCESS: "green",
    LoadingState.ERROR: "red",
}


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: Sequence[Product], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Title", style="bold", width=36)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=18)
    table.add_column("Image", width=30, overflow="ellipsis", no_wrap=True)

    for p in products:
        table.add_row(str(p.id), p.title, f"${p.price:.2f}", p.category, p.image)
    console.print(table)


def show_product(product: Product):
    console.print(Panel.fit(
        f"[bold]{product.title}[/bold]\n"
        f"Price: [green]${product.price:.2f}[/green]\n"
        f"Category: {product.category}\n"
        f"Image: [link={product.image}]{product.image}[/link]\n\n"
        f"{product.description}",
        title=f"ℹ️ Product {product.id}",
        border_style="cyan"
    ))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def render_state(store: CatalogStore):
    state = store.loading_state
    style = STATE_STYLES[state]
    line = f"[{style}]● {state.value}[/{style}]  [dim]{len(store.products)} products[/dim]"
    if store.error:
        line += f"\n[red]{store.error}[/red]"
    return Panel.fit(line, title="Catalog")


def create_header(base_url: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Fake Store Catalog",
        f"[bold blue]{base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
async def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    global session
    if session is None:
        session = PromptSession()
    return await session.prompt_async(f"{message} ", completer=completer, style=custom_style, default=default)


async def confirm(message: str, default: bool = False) -> bool:
    hint = "Y/n" if default else "y/N"
    completer = WordCompleter(["yes", "no"], ignore_case=True)
    while True:
        answer = (await prompt_with_autocomplete(f"{message} [{hint}]", completer=completer)).strip().lower()
        if not answer:
            return default
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        console.print("[red]Please answer y or n.[/red]")


def get_product_completer(store: CatalogStore):
    return WordCompleter([str(p.id) for p in store.products], ignore_case=True)


async def ask_product(store: CatalogStore, message: str = "Enter product ID") -> Optional[Product]:
    raw = (await prompt_with_autocomplete(message, completer=get_product_completer(store))).strip()
    try:
        pid = int(raw)
    except ValueError:
        console.print("[red]Please enter a numeric product ID.[/red]")
        return None
    for p in store.products:
        if p.id == pid:
            return p
    console.print(f"[yellow]Product {pid} is not in the catalog[/yellow]")
    return None


async def fill_form(form: ProductFormView) -> Dict[str, Any]:
    categories = sorted({p.category for p in form.store.products})
    values: Dict[str, Any] = {}
    for field in FORM_FIELDS:
        current = form.values.get(field, "")
        completer = WordCompleter(categories, ignore_case=True) if field == "category" else None
        label = field.capitalize()
        if field in form.field_errors:
            label += f" [{form.field_errors[field]}]"
        values[field] = (await prompt_with_autocomplete(
            f"{label}:", completer=completer, default=str(current) if current else ""
        )).strip()
    return values


# ---------------------------
# Screens
# ---------------------------
async def run_form(form: ProductFormView):
    if form.is_edit_mode and not await form.load():
        console.print(show_status(form.error_message or "Failed to load product", False))
        return

    title = f"✏️ Edit product {form.product_id}" if form.is_edit_mode else "➕ New product"
    console.print(Panel.fit(title, border_style="yellow"))

    while True:
        values = await fill_form(form)
        product = await form.submit(values)
        if product is not None:
            console.print(show_status(form.success_message))
            show_product(product)
            return
        if form.field_errors:
            console.print(show_status("Invalid fields: " + ", ".join(form.invalid_fields), False))
        elif form.error_message:
            console.print(show_status(form.error_message, False))
        if not await confirm("Try again?", default=True):
            return


async def run_delete(list_view: ProductListView):
    product = await ask_product(list_view.store, "Product ID to delete")
    if product is None:
        return
    list_view.confirm_delete(product)
    if not await confirm(f"Delete '{product.title}'?"):
        list_view.cancel_delete()
        return
    if await list_view.delete_product():
        console.print(show_status(f"Product {product.id} deleted"))


async def run_detail(store: CatalogStore):
    raw = (await prompt_with_autocomplete("Enter product ID", completer=get_product_completer(store))).strip()
    try:
        product = await store.fetch_one(int(raw))
    except ValueError:
        console.print("[red]Please enter a numeric product ID.[/red]")
        return
    except CatalogError as e:
        console.print(show_status(f"Failed to load product\n{e.message}", False))
        return
    show_product(product)


# ---------------------------
# Main menu
# ---------------------------
async def menu():
    settings = get_settings()
    configure_logging(settings.log_level)

    async with AsyncFakeStoreClient(base_url=settings.base_url, timeout=settings.timeout) as client:
        store = CatalogStore(client)
        list_view = ProductListView(store)

        console.clear()
        console.print(create_header(settings.base_url))

        with console.status("Loading products..."):
            await list_view.load()

        while True:
            console.print(render_state(store))

            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)

            options = [
                ("1", "📦 List products", "4", "✏️ Edit product"),
                ("2", "ℹ️ Product details", "5", "🗑️ Delete product"),
                ("3", "➕ New product", "6", "🔄 Reload from API"),
                ("", "", "q", "👋 Quit"),
            ]
            for row in options:
                menu_table.add_row(*row)

            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = (await prompt_with_autocomplete(
                "\nChoose an option",
                completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
            )).strip()

            if choice == "1":
                show_products(store.products)

            elif choice == "2":
                await run_detail(store)

            elif choice == "3":
                await run_form(ProductFormView(store))

            elif choice == "4":
                product = await ask_product(store, "Product ID to edit")
                if product is not None:
                    await run_form(ProductFormView(store, product.id))

            elif choice == "5":
                await run_delete(list_view)

            elif choice == "6":
                with console.status("Loading products..."):
                    await list_view.load()
                if store.loading_state is LoadingState.SUCCESS:
                    show_products(store.products)

            elif choice.lower() in ("q", "quit", "exit"):
                if await confirm("Are you sure you want to quit?"):
                    console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                    return

            console.print()
            console.rule(style="dim")


if __name__ == "__main__":
    try:
        asyncio.run(menu())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
