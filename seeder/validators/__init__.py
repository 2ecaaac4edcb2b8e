from seeder.validators.field_coercion import (
    INVALID_TIMESTAMP,
    TRUTHY_TOKENS,
    coerce_field,
    to_boolean,
    to_float,
    to_int,
    to_timestamp,
)

__all__ = [
    "INVALID_TIMESTAMP",
    "TRUTHY_TOKENS",
    "coerce_field",
    "to_boolean",
    "to_float",
    "to_int",
    "to_timestamp",
]
