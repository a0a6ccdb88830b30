"""Core type definitions shared by the pricing modules."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from eth_utils.address import is_address, to_checksum_address

from core.units import format_units


@dataclass(frozen=True)
class Address:
    """EVM address with validation and checksumming."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Address value must be a string")
        if not is_address(self.value):
            raise ValueError("Invalid EVM address")
        object.__setattr__(self, "value", to_checksum_address(self.value))

    @classmethod
    def from_string(cls, s: str) -> "Address":
        return cls(s)

    @property
    def checksum(self) -> str:
        return self.value

    @property
    def lower(self) -> str:
        return self.value.lower()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Address):
            return self.lower == other.lower
        if isinstance(other, str):
            return self.lower == other.lower()
        return False

    def __lt__(self, other: "Address") -> bool:
        return self.lower < other.lower

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    address: Address
    symbol: str
    decimals: int
    name: str = ""
    is_native: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.decimals, int) or self.decimals < 0:
            raise ValueError("decimals must be a non-negative integer")

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        return cls(
            address=Address.from_string(data["address"]),
            symbol=data["symbol"],
            decimals=int(data["decimals"]),
            name=data.get("name", ""),
            is_native=bool(data.get("is_native", False)),
        )

    def amount(self, raw: int) -> "TokenAmount":
        return TokenAmount(raw=raw, decimals=self.decimals, symbol=self.symbol)


@dataclass(frozen=True)
class TokenAmount:
    """
    Represents a token amount with proper decimal handling.

    Internally stores raw integer (smallest unit).
    Provides human-readable formatting.
    """

    raw: int
    decimals: int
    symbol: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.raw, int):
            raise TypeError("raw must be an int")
        if not isinstance(self.decimals, int) or self.decimals < 0:
            raise ValueError("decimals must be a non-negative integer")

    @classmethod
    def from_human(
        cls, amount: str | Decimal, decimals: int, symbol: str | None = None
    ) -> "TokenAmount":
        """Create from human-readable amount (e.g., '1.5' OCTO)."""
        if isinstance(amount, float):
            raise TypeError("amount must be a string or Decimal, not float")
        if isinstance(amount, str):
            decimal_amount = Decimal(amount)
        elif isinstance(amount, Decimal):
            decimal_amount = amount
        else:
            raise TypeError("amount must be a string or Decimal")

        scale = Decimal(10) ** Decimal(decimals)
        raw_decimal = decimal_amount * scale
        if raw_decimal != raw_decimal.to_integral_value():
            raise ValueError("amount has more precision than decimals allow")
        return cls(raw=int(raw_decimal), decimals=decimals, symbol=symbol)

    @property
    def human(self) -> Decimal:
        """Returns human-readable decimal."""
        scale = Decimal(10) ** Decimal(self.decimals)
        return Decimal(self.raw) / scale

    def __add__(self, other: "TokenAmount") -> "TokenAmount":
        if not isinstance(other, TokenAmount):
            return NotImplemented
        if self.decimals != other.decimals:
            raise ValueError("TokenAmount decimals must match")
        symbol = self.symbol
        if self.symbol != other.symbol:
            symbol = self.symbol or other.symbol
        return TokenAmount(self.raw + other.raw, self.decimals, symbol)

    def __str__(self) -> str:
        return f"{format_units(self.raw, self.decimals)} {self.symbol or ''}".strip()
