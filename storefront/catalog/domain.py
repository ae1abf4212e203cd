"""Domain models for the catalog.

Plain dataclasses for categories and products. The relationship between
products and categories is not stored here: the category registry owns
the linked-product table.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal


@dataclass
class Category:
    """A product category.

    Attributes:
        id: Identifier assigned by the registry.
        name: Display name, never blank.
        description: Optional free text.
    """

    id: int
    name: str
    description: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Product:
    """A catalog product.

    Attributes:
        id: Identifier assigned by the catalog.
        name: Product name.
        price: Unit price.
        description: Optional free text.
        stock: Units available, if tracked.
        image: Optional image URL or path.
        category_id: Optional reference to a ``Category`` by id.
    """

    id: int
    name: str
    price: Decimal
    description: str | None = None
    stock: int | None = None
    image: str | None = None
    category_id: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)
