"""
Data models for theater billing
"""

from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import UnknownPlayTypeError


class Genre(str, Enum):
    """Play genres with a pricing rule"""

    TRAGEDY = "tragedy"
    COMEDY = "comedy"
    HISTORY = "history"
    PASTORAL = "pastoral"

    @classmethod
    def parse(cls, value: str) -> "Genre":
        """
        Resolve a play type string to a genre

        Raises:
            UnknownPlayTypeError: if the value names no known genre
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownPlayTypeError(str(value)) from None


class Play(BaseModel):
    """A play from the catalog"""

    model_config = ConfigDict(frozen=True)

    name: str
    # Raw string so an unpriced type is only rejected when it is charged
    type: str


class Performance(BaseModel):
    """A single performance of a play on an invoice"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    play_id: str = Field(alias="playID")
    audience: int = Field(ge=0)


class Invoice(BaseModel):
    """A customer's invoice; performance order is the statement line order"""

    model_config = ConfigDict(frozen=True)

    customer: str
    performances: Tuple[Performance, ...] = ()


class PerformanceCharge(BaseModel):
    """Computed charge for one performance line"""

    model_config = ConfigDict(frozen=True)

    play_id: str
    play_name: str
    genre: Genre
    audience: int
    amount: int  # cents
    volume_credits: int


class StatementData(BaseModel):
    """All computed lines of a statement, in invoice order"""

    model_config = ConfigDict(frozen=True)

    customer: str
    charges: Tuple[PerformanceCharge, ...] = ()

    @property
    def total_amount(self) -> int:
        return sum(charge.amount for charge in self.charges)

    @property
    def total_volume_credits(self) -> int:
        return sum(charge.volume_credits for charge in self.charges)
