"""Parameters of the ledger's read-only queries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from nftledger.errors import InvalidAddressError
from nftledger.keys import AccAddress
from nftledger.nft import _parse_address


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _load_object(data: str | bytes) -> dict[str, Any]:
    value = json.loads(data)
    if not isinstance(value, dict):
        raise ValueError("query parameters must be encoded as a JSON object")
    return value


def _string(value: dict[str, Any], name: str) -> str:
    raw = value.get(name) or ""
    if not isinstance(raw, str):
        raise ValueError(f"{name} must be a string")
    return raw


@dataclass(frozen=True)
class QueryCollectionParams:
    """Parameters of the supply and collection queries."""

    denom: str = ""

    def __bytes__(self) -> bytes:
        return self.denom.encode("utf-8")

    def to_json(self) -> str:
        """Encode as JSON."""
        return _dumps({"Denom": self.denom})

    @classmethod
    def from_json(cls, data: str | bytes) -> QueryCollectionParams:
        """Decode from JSON; raise ValueError when malformed."""
        return cls(_string(_load_object(data), "Denom"))


@dataclass(frozen=True)
class QueryBalanceParams:
    """Parameters of the owner queries; the denom is optional."""

    owner: AccAddress = field(default_factory=AccAddress)
    denom: str = ""

    def __post_init__(self) -> None:
        if self.owner is None:
            object.__setattr__(self, "owner", AccAddress())
        elif not isinstance(self.owner, AccAddress):
            object.__setattr__(self, "owner", AccAddress(self.owner))

    def to_json(self) -> str:
        """Encode as JSON."""
        return _dumps({"Owner": str(self.owner), "Denom": self.denom})

    @classmethod
    def from_json(cls, data: str | bytes) -> QueryBalanceParams:
        """Decode from JSON; raise ValueError when malformed."""
        value = _load_object(data)
        try:
            owner = _parse_address(value.get("Owner"))
        except InvalidAddressError as err:
            raise ValueError(str(err)) from err
        return cls(owner, _string(value, "Denom"))


@dataclass(frozen=True)
class QueryNFTParams:
    """Parameters of the single NFT query."""

    denom: str = ""
    token_id: str = ""

    def to_json(self) -> str:
        """Encode as JSON."""
        return _dumps({"Denom": self.denom, "TokenID": self.token_id})

    @classmethod
    def from_json(cls, data: str | bytes) -> QueryNFTParams:
        """Decode from JSON; raise ValueError when malformed."""
        value = _load_object(data)
        return cls(_string(value, "Denom"), _string(value, "TokenID"))