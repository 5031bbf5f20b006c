"""
Price-range buckets shared by the catalog filter and the analytics grouping.

The bucket table is the only definition of the boundaries: the Python
classifier, the SQL CASE expression and the filter bounds are all derived
from it, so a price lands in the same bucket everywhere.
"""

from decimal import Decimal, InvalidOperation
from typing import List, NamedTuple, Optional, Tuple, Union

from sqlalchemy import case

Number = Union[int, float, Decimal, str]


class PriceBucket(NamedTuple):
    label: str
    lower: Optional[Decimal]  # inclusive
    upper: Optional[Decimal]  # exclusive


PRICE_BUCKETS: Tuple[PriceBucket, ...] = (
    PriceBucket('Under £20', None, Decimal('20')),
    PriceBucket('£20-£50', Decimal('20'), Decimal('50')),
    PriceBucket('£50-£100', Decimal('50'), Decimal('100')),
    PriceBucket('£100-£200', Decimal('100'), Decimal('200')),
    PriceBucket('Over £200', Decimal('200'), None),
)

PRICE_RANGES: List[str] = [bucket.label for bucket in PRICE_BUCKETS]


def _to_decimal(price: Number) -> Decimal:
    if isinstance(price, Decimal):
        return price
    try:
        # str() evita artefatos binários de float (19.99 -> 19.989999...)
        return Decimal(str(price))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid price: {price!r}") from e


def classify(price: Number) -> str:
    """Returns the price-range label for a price (lower bound inclusive)."""
    value = _to_decimal(price)
    for bucket in PRICE_BUCKETS:
        if bucket.upper is None or value < bucket.upper:
            return bucket.label
    return PRICE_BUCKETS[-1].label


def bounds_for(label: str) -> Tuple[Optional[Decimal], Optional[Decimal]]:
    """Returns the (inclusive lower, exclusive upper) bounds for a label."""
    for bucket in PRICE_BUCKETS:
        if bucket.label == label:
            return bucket.lower, bucket.upper
    raise KeyError(label)


def is_price_range(label: str) -> bool:
    return label in PRICE_RANGES


def price_range_case(column):
    """SQL CASE expression classifying ``column`` with the same buckets."""
    whens = [(column < bucket.upper, bucket.label) for bucket in PRICE_BUCKETS if bucket.upper is not None]
    return case(*whens, else_=PRICE_BUCKETS[-1].label)


def format_price(price: Number) -> str:
    return f"£{_to_decimal(price).quantize(Decimal('0.01'))}"
