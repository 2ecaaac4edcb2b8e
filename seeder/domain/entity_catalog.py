"""
seeder/domain/entity_catalog.py

EntitySpecs for the store schema, declared in dependency order.

Products and carts have no foreign keys; cart items reference both, and
favorites and reviews reference products. Orders have no foreign keys and
run after favorites.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from seeder.domain.entity_spec import EntitySpec, FieldKind, FieldSpec


class UnknownEntityTypeError(ValueError):
    """
    Raised when a requested entity type is not in the catalog.
    """


def _timestamps(*, optional: bool = False) -> tuple[FieldSpec, ...]:
    return (
        FieldSpec("createdAt", FieldKind.TIMESTAMP, optional=optional),
        FieldSpec("updatedAt", FieldKind.TIMESTAMP, optional=optional),
    )


PRODUCTS = EntitySpec(
    entity_type="products",
    source_file="Product.csv",
    fields=(
        FieldSpec("id"),
        FieldSpec("name"),
        FieldSpec("company"),
        FieldSpec("description"),
        FieldSpec("featured", FieldKind.BOOLEAN),
        FieldSpec("image"),
        FieldSpec("price", FieldKind.INTEGER),
        FieldSpec("clerkId"),
        *_timestamps(),
    ),
)

CARTS = EntitySpec(
    entity_type="carts",
    source_file="Cart.csv",
    fields=(
        FieldSpec("id"),
        FieldSpec("clerkId"),
        FieldSpec("numItemsInCart", FieldKind.INTEGER),
        FieldSpec("cartTotal", FieldKind.INTEGER),
        FieldSpec("shipping", FieldKind.INTEGER),
        FieldSpec("tax", FieldKind.INTEGER),
        FieldSpec("taxRate", FieldKind.FLOAT),
        FieldSpec("orderTotal", FieldKind.INTEGER),
        *_timestamps(),
    ),
)

CART_ITEMS = EntitySpec(
    entity_type="cart_items",
    source_file="CartItem.csv",
    fields=(
        FieldSpec("id"),
        FieldSpec("productId"),
        FieldSpec("cartId"),
        FieldSpec("amount", FieldKind.INTEGER),
        *_timestamps(),
    ),
    references={"productId": "products", "cartId": "carts"},
    label="cart items",
)

FAVORITES = EntitySpec(
    entity_type="favorites",
    source_file="Favorite.csv",
    fields=(
        FieldSpec("id", required_identifier=True),
        FieldSpec("clerkId", required_identifier=True),
        FieldSpec("productId", required_identifier=True),
        *_timestamps(optional=True),
    ),
    references={"productId": "products"},
)

ORDERS = EntitySpec(
    entity_type="orders",
    source_file="Order.csv",
    fields=(
        FieldSpec("id"),
        FieldSpec("clerkId"),
        FieldSpec("products", FieldKind.INTEGER),
        FieldSpec("orderTotal", FieldKind.INTEGER),
        FieldSpec("tax", FieldKind.INTEGER),
        FieldSpec("shipping", FieldKind.INTEGER),
        FieldSpec("email"),
        FieldSpec("isPaid", FieldKind.BOOLEAN),
        *_timestamps(),
    ),
)

REVIEWS = EntitySpec(
    entity_type="reviews",
    source_file="Review.csv",
    fields=(
        FieldSpec("id"),
        FieldSpec("clerkId"),
        FieldSpec("rating", FieldKind.INTEGER),
        FieldSpec("comment"),
        FieldSpec("authorName"),
        FieldSpec("authorImageUrl"),
        *_timestamps(),
        FieldSpec("productId"),
    ),
    references={"productId": "products"},
)

ENTITY_SPECS: dict[str, EntitySpec] = {
    spec.entity_type: spec
    for spec in (PRODUCTS, CARTS, CART_ITEMS, FAVORITES, ORDERS, REVIEWS)
}


def get_entity_specs(entity_types: Iterable[str] | None = None) -> list[EntitySpec]:
    """
    Return catalog specs, optionally restricted to ``entity_types``.

    The selection keeps catalog order, not the order of the request.
    """

    if entity_types is None:
        return list(ENTITY_SPECS.values())

    requested = [name.strip() for name in entity_types if name.strip()]
    unknown = sorted(set(requested) - set(ENTITY_SPECS))
    if unknown:
        allowed = ", ".join(ENTITY_SPECS)
        raise UnknownEntityTypeError(
            f"Unknown entity type(s): {', '.join(unknown)}. Allowed values: {allowed}."
        )
    wanted = set(requested)
    return [spec for name, spec in ENTITY_SPECS.items() if name in wanted]


def describe_catalog(specs: Sequence[EntitySpec] | None = None) -> list[str]:
    return [
        f"{spec.entity_type} <- {spec.source_file}"
        for spec in (specs if specs is not None else ENTITY_SPECS.values())
    ]
