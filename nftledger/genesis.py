"""Genesis state of the NFT ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nftledger.collection import Collections
from nftledger.errors import InvalidAddressError
from nftledger.owners import Owner


@dataclass(frozen=True)
class GenesisState:
    """The owners and collections the ledger starts from."""

    owners: tuple[Owner, ...] = ()
    collections: Collections = field(default_factory=Collections)

    def __post_init__(self) -> None:
        object.__setattr__(self, "owners", tuple(self.owners))
        if not isinstance(self.collections, Collections):
            object.__setattr__(self, "collections", Collections(*self.collections))

    def _json_value(self) -> dict[str, Any]:
        return {
            "owners": [owner._json_value() for owner in self.owners],
            "collections": self.collections._json_value(),
        }

    @classmethod
    def _from_json_value(cls, value: Any) -> GenesisState:
        if not isinstance(value, dict):
            raise ValueError("genesis state must be encoded as a JSON object")
        owners = value.get("owners") or []
        if not isinstance(owners, list):
            raise ValueError("owners must be a list")
        return cls(
            tuple(Owner._from_json_value(owner) for owner in owners),
            Collections._from_json_value(value.get("collections")),
        )


def default_genesis_state() -> GenesisState:
    """Return a genesis state with no owners and no collections."""
    return GenesisState((), Collections())


def validate_genesis(data: GenesisState) -> None:
    """Raise if any owner in the genesis state has an empty address."""
    for owner in data.owners:
        if owner.address.empty():
            raise InvalidAddressError("address cannot be empty")