#!/usr/bin/env python
import asyncio

from rich import print

from catalog.config import get_settings
from catalog.errors import CatalogError
from catalog.log import configure_logging
from catalog.store import CatalogStore
from sdk.fakestore import AsyncFakeStoreClient


async def main():
    settings = get_settings()
    configure_logging(settings.log_level)

    async with AsyncFakeStoreClient(base_url=settings.base_url, timeout=settings.timeout) as client:
        store = CatalogStore(client)
        store.subscribe(lambda s: print(f"[dim]state={s.loading_state.value} products={len(s.products)}[/dim]"))

        # -----------------------------
        # Load the catalog
        # -----------------------------
        print("\nLoading products...")
        products = await store.load_all()
        print([p.title for p in products[:3]])

        # -----------------------------
        # Create (kept locally, the API does not store it)
        # -----------------------------
        print("\nCreating a product...")
        created = await store.create({
            "title": "Demo Lamp",
            "price": 19.99,
            "category": "electronics",
            "image": "https://example.com/lamp.png",
            "description": "A lamp that only exists in this process.",
        })
        print(created)
        print("First in catalog:", store.products[0].id)

        # -----------------------------
        # Update the first remote product
        # -----------------------------
        target = products[0].id
        print(f"\nUpdating product {target}...")
        updated = await store.update(target, {
            "title": "Renamed backpack",
            "price": 99.5,
            "category": products[0].category,
            "image": products[0].image,
            "description": products[0].description,
        })
        print(updated)

        # -----------------------------
        # Remove, then read it back from the API
        # -----------------------------
        print(f"\nRemoving product {target}...")
        await store.remove(target)
        print("Still local?", any(p.id == target for p in store.products))
        print("Remote copy:", await store.fetch_one(target))

        # -----------------------------
        # A failing call
        # -----------------------------
        print("\nUpdating a product that does not exist...")
        try:
            await store.update(999999, created.model_dump(exclude={"id"}))
        except CatalogError as e:
            print(f"[red]{e.message}[/red]")
        print("State:", store.loading_state.value)


if __name__ == "__main__":
    asyncio.run(main())
