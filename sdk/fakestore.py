# sdk/fakestore.py
import httpx
import requests
from typing import Any, Dict, Optional
from rich import print

DEFAULT_BASE_URL = "https://fakestoreapi.com"


class FakeStoreClient:
    """Blocking client for the Fake Store products API."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def list_products(self):
        r = self.session.get(f"{self.base_url}/products", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, payload: Dict[str, Any]):
        r = self.session.post(f"{self.base_url}/products", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: int, payload: Dict[str, Any]):
        r = self.session.put(f"{self.base_url}/products/{product_id}", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        # ack body may be empty
        return r.json() if r.content else None

    def close(self):
        self.session.close()


class AsyncFakeStoreClient:
    """
    Non-blocking client for the same endpoints, used by the catalog store.
    Pass `transport` to route requests somewhere other than the network
    (an ASGI app or a mock) without changing any call site.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 10,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def list_products(self):
        r = await self._client.get(f"{self.base_url}/products")
        r.raise_for_status()
        return r.json()

    async def get_product(self, product_id: int):
        r = await self._client.get(f"{self.base_url}/products/{product_id}")
        r.raise_for_status()
        return r.json()

    async def create_product(self, payload: Dict[str, Any]):
        r = await self._client.post(f"{self.base_url}/products", json=payload)
        r.raise_for_status()
        return r.json()

    async def update_product(self, product_id: int, payload: Dict[str, Any]):
        r = await self._client.put(f"{self.base_url}/products/{product_id}", json=payload)
        r.raise_for_status()
        return r.json()

    async def delete_product(self, product_id: int):
        r = await self._client.delete(f"{self.base_url}/products/{product_id}")
        r.raise_for_status()
        return r.json() if r.content else None


def _product_fields(args) -> Dict[str, Any]:
    return {
        "title": args.title,
        "price": args.price,
        "category": args.category,
        "image": args.image,
        "description": args.description,
    }


def main(argv=None):
    import argparse
    from catalog.config import get_settings

    parser = argparse.ArgumentParser(description="Fake Store products CLI")
    parser.add_argument("--base-url", help="API base URL (defaults to FAKESTORE_BASE_URL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    for name, help_text in (("create-product", "Create a product"), ("update-product", "Replace a product")):
        sp = subparsers.add_parser(name, help=help_text)
        if name == "update-product":
            sp.add_argument("--product-id", type=int, required=True, help="ID of the product")
        sp.add_argument("--title", required=True, help="Product title")
        sp.add_argument("--price", type=float, required=True, help="Price")
        sp.add_argument("--category", required=True, help="Product category")
        sp.add_argument("--image", required=True, help="Image URL")
        sp.add_argument("--description", required=True, help="Product description")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    args = parser.parse_args(argv)
    settings = get_settings()
    c = FakeStoreClient(base_url=args.base_url or settings.base_url, timeout=settings.timeout)

    try:
        if args.command == "list-products":
            print(c.list_products())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(_product_fields(args)))
        elif args.command == "update-product":
            print(c.update_product(args.product_id, _product_fields(args)))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
    finally:
        c.close()


if __name__ == "__main__":
    main()
