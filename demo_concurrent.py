import asyncio

from rich import print

from catalog.config import get_settings
from catalog.errors import CatalogError, StoreBusyError
from catalog.store import CatalogStore
from sdk.fakestore import AsyncFakeStoreClient

PRODUCT = {
    "title": "Double submit",
    "price": 5,
    "category": "electronics",
    "image": "https://example.com/x.png",
    "description": "Submitted twice in a row.",
}


async def submit(store, label):
    try:
        product = await store.create(PRODUCT)
        print(f"✅ {label} created product {product.id}")
    except StoreBusyError as e:
        print(f"⛔ {label} rejected: {e.message}")
    except CatalogError as e:
        print(f"❌ {label} failed: {e.message}")


async def main():
    settings = get_settings()
    async with AsyncFakeStoreClient(base_url=settings.base_url, timeout=settings.timeout) as client:
        store = CatalogStore(client)
        await store.load_all()
        before = len(store.products)

        print("\n⚡ Simulating a double submit...")
        await asyncio.gather(submit(store, "first"), submit(store, "second"))

        print(f"\n📦 Catalog grew by {len(store.products) - before}, state={store.loading_state.value}")


if __name__ == "__main__":
    asyncio.run(main())
