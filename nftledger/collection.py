"""Collections of NFTs grouped by denomination."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable

from nftledger.errors import NFTAlreadyExistsError, UnknownNFTError
from nftledger.nft import NFTs, BaseNFT, _SortedSet, _dumps


@dataclass(frozen=True)
class Collection:
    """The NFTs of one denomination. Every change returns a new collection."""

    denom: str = ""
    nfts: NFTs = field(default_factory=NFTs)

    def __post_init__(self) -> None:
        object.__setattr__(self, "denom", self.denom.strip())
        if not isinstance(self.nfts, NFTs):
            object.__setattr__(self, "nfts", NFTs(*self.nfts))

    def get_nft(self, nft_id: str) -> BaseNFT:
        """Return the NFT with ``nft_id``."""
        nft = self.nfts.find(nft_id)
        if nft is None:
            raise UnknownNFTError(f"NFT #{nft_id} doesn't exist in collection {self.denom}")
        return nft

    def contains_nft(self, nft_id: str) -> bool:
        """Return whether the collection holds the NFT ``nft_id``."""
        return self.nfts.find(nft_id) is not None

    def add_nft(self, nft: BaseNFT) -> Collection:
        """Return a collection with ``nft`` added."""
        if self.contains_nft(nft.id):
            raise NFTAlreadyExistsError(
                f"NFT #{nft.id} already exists in collection {self.denom}"
            )
        return dataclasses.replace(self, nfts=self.nfts.append(nft))

    def _changed(self, change: Callable[[BaseNFT], NFTs], nft: BaseNFT) -> Collection:
        try:
            nfts = change(nft)
        except KeyError:
            raise UnknownNFTError(
                f"NFT #{nft.id} doesn't exist on collection {self.denom}"
            ) from None
        return dataclasses.replace(self, nfts=nfts)

    def update_nft(self, nft: BaseNFT) -> Collection:
        """Return a collection with the NFT of the same ID replaced by ``nft``."""
        return self._changed(lambda n: self.nfts.update(n.id, n), nft)

    def delete_nft(self, nft: BaseNFT) -> Collection:
        """Return a collection without the NFT of the same ID as ``nft``."""
        return self._changed(lambda n: self.nfts.remove(n.id), nft)

    def supply(self) -> int:
        """Return the number of NFTs in the collection."""
        return len(self.nfts)

    def _json_value(self) -> dict[str, Any]:
        value: dict[str, Any] = {"nfts": self.nfts._json_value()}
        if self.denom:
            value["denom"] = self.denom
        return value

    def __str__(self) -> str:
        return f"Denom: \t\t\t\t{self.denom}\nNFTs:\n\n{self.nfts}"


def empty_collection() -> Collection:
    """Return a collection with no denomination and no NFTs."""
    return Collection("", NFTs())


class Collections(_SortedSet):
    """An immutable set of collections kept sorted by denomination."""

    __slots__ = ()
    _key = attrgetter("denom")
    _label = "collections"

    def append(self, *args: Collection) -> Collections:
        """Return a new set holding these collections and the given ones."""
        return self._extended(args)

    def find(self, denom: str) -> Collection | None:
        """Return the collection of ``denom``, or None."""
        return self._get(denom)

    def remove(self, denom: str) -> Collections:
        """Return a new set without the collection of ``denom``."""
        return self._without(denom)

    def empty(self) -> bool:
        """Return whether the set holds no collections."""
        return not self._items

    def sort(self) -> Collections:
        """Return the set in sorted order."""
        return Collections(*self._items)

    def to_json(self) -> str:
        """Encode as a JSON object keyed by denomination."""
        return _dumps(self._json_value())

    @classmethod
    def from_json(cls, data: str | bytes) -> Collections:
        """Decode from a JSON object keyed by denomination."""
        return cls._from_json_value(json.loads(data))

    @staticmethod
    def _encode(collection: Collection) -> dict[str, Any]:
        return {"nfts": collection.nfts._json_value()}

    @classmethod
    def _decode(cls, denom: str, entry: dict[str, Any]) -> Collection:
        return Collection(denom, NFTs._from_json_value(entry.get("nfts")))