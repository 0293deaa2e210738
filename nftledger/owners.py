"""Ownership of NFTs: the IDs each account holds, grouped by denomination."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Iterator

from nftledger.errors import UnknownCollectionError, UnknownNFTError
from nftledger.keys import AccAddress
from nftledger.nft import _parse_address
from nftledger.search import find_index

_denom = attrgetter("denom")


@dataclass(frozen=True)
class IDCollection:
    """The sorted NFT IDs of one denomination. Changes return a new value."""

    denom: str = ""
    ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "denom", self.denom.strip())
        object.__setattr__(self, "ids", tuple(sorted(self.ids)))

    def exists(self, nft_id: str) -> bool:
        """Return whether ``nft_id`` is in the collection."""
        return find_index(self.ids, nft_id) != -1

    def add_id(self, nft_id: str) -> IDCollection:
        """Return a collection with ``nft_id`` added."""
        return dataclasses.replace(self, ids=(*self.ids, nft_id))

    def delete_id(self, nft_id: str) -> IDCollection:
        """Return a collection without ``nft_id``."""
        index = find_index(self.ids, nft_id)
        if index == -1:
            raise UnknownNFTError(
                f"ID #{nft_id} doesn't exist on ID Collection {self.denom}"
            )
        return dataclasses.replace(self, ids=self.ids[:index] + self.ids[index + 1:])

    def supply(self) -> int:
        """Return the number of IDs in the collection."""
        return len(self.ids)

    def _json_value(self) -> dict[str, Any]:
        return {"denom": self.denom, "ids": list(self.ids)}

    @classmethod
    def _from_json_value(cls, value: Any) -> IDCollection:
        if value is None:
            return cls()
        if not isinstance(value, dict):
            raise ValueError("ID collection must be encoded as a JSON object")
        denom = value.get("denom") or ""
        ids = value.get("ids") or []
        if not isinstance(denom, str):
            raise ValueError("denom must be a string")
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            raise ValueError("ids must be a list of strings")
        return cls(denom, tuple(ids))

    def __str__(self) -> str:
        return f"Denom: \t\t\t{self.denom}\nIDs:        \t{','.join(self.ids)}"


class IDCollections(Sequence):
    """An immutable list of ID collections, kept in the order given."""

    __slots__ = ("_items",)

    def __init__(self, *collections: IDCollection) -> None:
        self._items = tuple(collections)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return IDCollections(*self._items[index])
        return self._items[index]

    def __iter__(self) -> Iterator[IDCollection]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IDCollections):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self) -> str:
        return f"IDCollections({', '.join(map(repr, self._items))})"

    def __str__(self) -> str:
        return "\n".join(str(collection) for collection in self._items)

    def append(self, *collections: IDCollection) -> IDCollections:
        """Return a sorted list holding these collections and the given ones."""
        return IDCollections(*self._items, *collections).sort()

    def sort(self) -> IDCollections:
        """Return the collections sorted by denomination."""
        return IDCollections(*sorted(self._items, key=_denom))

    def _json_value(self) -> list[dict[str, Any]]:
        return [collection._json_value() for collection in self._items]


@dataclass(frozen=True)
class Owner:
    """An account address and the ID collections it owns."""

    address: AccAddress = field(default_factory=AccAddress)
    id_collections: IDCollections = field(default_factory=IDCollections)

    def __post_init__(self) -> None:
        address = self.address
        if address is None:
            address = AccAddress()
        elif not isinstance(address, AccAddress):
            address = AccAddress(address)
        object.__setattr__(self, "address", address)
        if not isinstance(self.id_collections, IDCollections):
            object.__setattr__(self, "id_collections", IDCollections(*self.id_collections))

    def supply(self) -> int:
        """Return the number of NFT IDs owned across all denominations."""
        return sum(collection.supply() for collection in self.id_collections)

    def get_id_collection(self, denom: str) -> IDCollection | None:
        """Return the ID collection of ``denom``, or None."""
        return next((c for c in self.id_collections if c.denom == denom), None)

    def update_id_collection(self, id_collection: IDCollection) -> Owner:
        """Return an owner with the collection of the same denom replaced."""
        for index, current in enumerate(self.id_collections):
            if current.denom == id_collection.denom:
                items = list(self.id_collections)
                items[index] = id_collection
                return dataclasses.replace(self, id_collections=IDCollections(*items))
        raise UnknownCollectionError(
            f"ID Collection {id_collection.denom} doesn't exist for owner {self.address}"
        )

    def delete_id(self, denom: str, nft_id: str) -> Owner:
        """Return an owner without ``nft_id`` in its ``denom`` collection."""
        id_collection = self.get_id_collection(denom)
        if id_collection is None:
            raise UnknownNFTError(f"ID #{nft_id} doesn't exist in ID Collection {denom}")
        return self.update_id_collection(id_collection.delete_id(nft_id))

    def _json_value(self) -> dict[str, Any]:
        return {
            "address": str(self.address),
            "idCollections": self.id_collections._json_value(),
        }

    @classmethod
    def _from_json_value(cls, value: Any) -> Owner:
        if not isinstance(value, dict):
            raise ValueError("owner must be encoded as a JSON object")
        collections = value.get("idCollections") or []
        if not isinstance(collections, list):
            raise ValueError("idCollections must be a list")
        return cls(
            _parse_address(value.get("address")),
            IDCollections(*(IDCollection._from_json_value(c) for c in collections)),
        )

    def __str__(self) -> str:
        return (
            f"\n\tAddress: \t\t\t\t{self.address}"
            f"\n\tIDCollections:        \t{self.id_collections}"
        )