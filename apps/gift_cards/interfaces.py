"""
Capabilities the gift card core needs from its collaborators.

Orders, variants and line items from other apps satisfy these structurally;
the core only ever touches the attributes declared here.
"""
from decimal import Decimal
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class HasTotal(Protocol):
    total: Decimal


@runtime_checkable
class HasOwner(Protocol):
    user_id: Optional[int]


@runtime_checkable
class PriceSource(Protocol):
    price: Decimal


@runtime_checkable
class LineItemPriceSource(PriceSource, Protocol):
    quantity: int


class RedeemableOrder(HasTotal, HasOwner, Protocol):
    """Order as seen by the redemption protocol"""
    pk: int
    state: str

    @property
    def is_pre_completion(self) -> bool: ...
