from typing import Dict, Any, List

# This file holds the seed catalog served by the local demo gateway.
# Writes against the gateway are never stored here.

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Fjallraven - Foldsack No. 1 Backpack, Fits 15 Laptops",
        "price": 109.95,
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
        "description": "Your perfect pack for everyday use and walks in the forest.",
    },
    {
        "id": 2,
        "title": "Mens Casual Premium Slim Fit T-Shirts",
        "price": 22.3,
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
        "description": "Slim-fitting style, contrast raglan long sleeve, three-button henley placket.",
    },
    {
        "id": 3,
        "title": "John Hardy Women's Legends Naga Gold & Silver Dragon Station Chain Bracelet",
        "price": 695.0,
        "category": "jewelery",
        "image": "https://fakestoreapi.com/img/71pWzhdJNwL._AC_UL640_QL65_ML3_.jpg",
        "description": "From our Legends Collection, the Naga was inspired by the mythical water dragon.",
    },
    {
        "id": 4,
        "title": "WD 2TB Elements Portable External Hard Drive - USB 3.0",
        "price": 64.0,
        "category": "electronics",
        "image": "https://fakestoreapi.com/img/61IBBVJvSDL._AC_SY879_.jpg",
        "description": "USB 3.0 and USB 2.0 compatibility, fast data transfers, improve PC performance.",
    },
    {
        "id": 5,
        "title": "Opna Women's Short Sleeve Moisture",
        "price": 7.95,
        "category": "women's clothing",
        "image": "https://fakestoreapi.com/img/51eg55uWmdL._AC_UX679_.jpg",
        "description": "100% Polyester, machine wash, lightweight and breathable.",
    },
]

PRODUCTS: Dict[int, Dict[str, Any]] = {p["id"]: p for p in SEED_PRODUCTS}
