"""Demo product catalog with a simulated remote search."""

import asyncio
from dataclasses import dataclass

import structlog
from rich.text import Text

from omnisearch import field_matcher

logger = structlog.get_logger(__name__)

# Simulated network latency for the remote catalog, in seconds
REMOTE_DELAY = 1.0


@dataclass(frozen=True, eq=False)
class Product:
    """A product; two products are the same when their ids match."""

    id: str
    name: str
    description: str
    price: float
    category: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


LOCAL_PRODUCTS = [
    Product("1", "iPhone 15 Pro", "Latest Apple smartphone with advanced camera system", 999.99, "Electronics"),
    Product("2", "MacBook Pro M3", "Powerful laptop for developers and creators", 1999.99, "Computers"),
    Product("3", "AirPods Pro", "Noise-cancelling wireless earbuds with spatial audio", 249.99, "Audio"),
    Product("4", "Samsung Galaxy S23", "Android smartphone with high-performance camera", 899.99, "Electronics"),
]

REMOTE_PRODUCTS = [
    Product("5", "iPad Air", "Thin and light tablet with all-day battery life", 599.99, "Tablets"),
    Product("6", "Pixel 7", "Google phone with incredible AI photography features", 699.99, "Electronics"),
    Product("7", "Sony WH-1000XM5", "Premium noise-cancelling headphones", 379.99, "Audio"),
    Product("8", "Apple Watch Series 8", "Health and fitness tracking smartwatch", 399.99, "Wearables"),
    Product("9", "Nintendo Switch OLED", "Gaming console with vibrant OLED display", 349.99, "Gaming"),
    Product("10", "Dell XPS 15", "Powerful Windows laptop with InfinityEdge display", 1799.99, "Computers"),
    Product("11", "LG C2 OLED TV", "65-inch 4K OLED TV with perfect blacks", 1999.99, "TVs"),
    Product("12", "Sonos Beam", "Smart soundbar with voice assistant support", 449.99, "Audio"),
]

match_product = field_matcher("name", "description", "category")


async def mock_remote_search(query: str) -> list[Product]:
    """Pretend to query a remote catalog."""
    await asyncio.sleep(REMOTE_DELAY)
    logger.debug("Performing remote search", query=query)

    if not query:
        return []
    return [p for p in REMOTE_PRODUCTS if match_product(p, query)]


def render_product(product: Product) -> Text:
    """Render a product as a single result line."""
    text = Text()
    text.append(product.name, style="bold")
    text.append(f"  ${product.price:,.2f}", style="cyan")
    text.append(f"\n    {product.description}", style="dim")
    return text
