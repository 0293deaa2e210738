"""Non-fungible tokens and sorted sets of them."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable, Iterator

from nftledger.keys import AccAddress
from nftledger.search import find_index


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _parse_address(value: Any) -> AccAddress:
    if value is None:
        return AccAddress()
    if not isinstance(value, str):
        raise ValueError(f"address must be a string, got {value!r}")
    if not value.strip():
        return AccAddress()
    return AccAddress.from_bech32(value)


@dataclass
class BaseNFT:
    """A non-fungible token: an ID, its owner and a token URI."""

    id: str
    owner: AccAddress = field(default_factory=AccAddress)
    token_uri: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.owner, AccAddress):
            self.owner = AccAddress(self.owner)
        self.token_uri = self.token_uri.strip()

    def edit_metadata(self, token_uri: str) -> None:
        """Replace the token URI."""
        self.token_uri = token_uri

    def __str__(self) -> str:
        return f"ID:\t\t\t\t{self.id}\nOwner:\t\t\t{self.owner}\nTokenURI:\t\t{self.token_uri}"


class _SortedSet(Sequence):
    """An immutable set of items kept sorted by a string key."""

    __slots__ = ("_items",)
    _key: Callable[[Any], str]
    _label = "items"

    def __init__(self, *items: Any) -> None:
        self._items = tuple(sorted(items, key=self._key))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(*self._items[index])
        return self._items[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(map(repr, self._items))})"

    def __str__(self) -> str:
        return "\n".join(str(item) for item in self._items)

    def _position(self, key: str) -> int:
        index = find_index(self._items, key, key=self._key)
        if index == -1:
            raise KeyError(key)
        return index

    def _get(self, key: str) -> Any:
        try:
            return self._items[self._position(key)]
        except KeyError:
            return None

    def _without(self, key: str):
        index = self._position(key)
        return type(self)(*self._items[:index], *self._items[index + 1:])

    def _extended(self, items: tuple[Any, ...]):
        return type(self)(*self._items, *items)

    def _json_value(self) -> dict[str, Any]:
        return {self._key(item): self._encode(item) for item in self._items}

    @classmethod
    def _from_json_value(cls, value: Any):
        if value is None:
            return cls()
        if not isinstance(value, dict):
            raise ValueError(f"{cls._label} must be encoded as a JSON object")
        items = []
        for name, entry in value.items():
            entry = entry or {}
            if not isinstance(entry, dict):
                raise ValueError(f"{name!r} must be encoded as a JSON object")
            items.append(cls._decode(name, entry))
        return cls(*items)


class NFTs(_SortedSet):
    """An immutable set of NFTs kept sorted by ID."""

    __slots__ = ()
    _key = attrgetter("id")
    _label = "NFTs"

    def append(self, *args: BaseNFT) -> NFTs:
        """Return a new set holding these NFTs and the given ones."""
        return self._extended(args)

    def find(self, nft_id: str) -> BaseNFT | None:
        """Return the NFT with ``nft_id``, or None."""
        return self._get(nft_id)

    def update(self, nft_id: str, nft: BaseNFT) -> NFTs:
        """Return a new set with the NFT ``nft_id`` replaced by ``nft``."""
        items = list(self._items)
        items[self._position(nft_id)] = nft
        return NFTs(*items)

    def remove(self, nft_id: str) -> NFTs:
        """Return a new set without the NFT ``nft_id``."""
        return self._without(nft_id)

    def empty(self) -> bool:
        """Return whether the set holds no NFTs."""
        return not self._items

    def sort(self) -> NFTs:
        """Return the set in sorted order."""
        return NFTs(*self._items)

    def to_json(self) -> str:
        """Encode as a JSON object keyed by NFT ID."""
        return _dumps(self._json_value())

    @classmethod
    def from_json(cls, data: str | bytes) -> NFTs:
        """Decode from a JSON object keyed by NFT ID."""
        return cls._from_json_value(json.loads(data))

    @staticmethod
    def _encode(nft: BaseNFT) -> dict[str, str]:
        entry = {"owner": str(nft.owner), "token_uri": nft.token_uri.strip()}
        if nft.id:
            entry["id"] = nft.id
        return entry

    @classmethod
    def _decode(cls, nft_id: str, entry: dict[str, Any]) -> BaseNFT:
        token_uri = entry.get("token_uri") or ""
        if not isinstance(token_uri, str):
            raise ValueError(f"token URI of NFT {nft_id!r} must be a string")
        return BaseNFT(nft_id, _parse_address(entry.get("owner")), token_uri)