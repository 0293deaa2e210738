"""Storage of collections and ownership records in a key-value store."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from nftledger.codec import marshal_binary_length_prefixed, unmarshal_binary_length_prefixed
from nftledger.collection import Collection
from nftledger.errors import UnknownCollectionError
from nftledger.keys import (
    COLLECTIONS_KEY_PREFIX,
    MODULE_NAME,
    OWNERS_KEY_PREFIX,
    AccAddress,
    collection_key,
    owner_key,
    owners_key,
    split_owner_key,
)
from nftledger.nft import NFTs, BaseNFT
from nftledger.owners import IDCollection, IDCollections, Owner


class KVStore:
    """An in-memory byte key-value store iterated in key order."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        """Return the value stored under ``key``, or None."""
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key``."""
        if not key:
            raise ValueError("key cannot be empty")
        self._data[bytes(key)] = bytes(value)

    def delete(self, key: bytes) -> None:
        """Remove ``key`` if present."""
        self._data.pop(bytes(key), None)

    def iterate_prefix(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Yield ``(key, value)`` pairs whose key starts with ``prefix``, in key order."""
        prefix = bytes(prefix)
        items = sorted(
            (key, value) for key, value in self._data.items() if key.startswith(prefix)
        )
        return iter(items)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray)) and bytes(key) in self._data


class Keeper:
    """Reads and writes NFT collections and ownership records."""

    def __init__(self, store: KVStore | None = None) -> None:
        self.store = store if store is not None else KVStore()
        self.logger = logging.getLogger(f"x/{MODULE_NAME}")

    # Collections

    def iterate_collections(self) -> Iterator[Collection]:
        """Yield every stored collection in key order."""
        for _, value in self.store.iterate_prefix(COLLECTIONS_KEY_PREFIX):
            yield unmarshal_binary_length_prefixed(value, Collection)

    def set_collection(self, denom: str, collection: Collection) -> None:
        """Store the whole collection of ``denom``."""
        self.store.set(collection_key(denom), marshal_binary_length_prefixed(collection))

    def get_collection(self, denom: str) -> Collection | None:
        """Return the collection of ``denom``, or None."""
        data = self.store.get(collection_key(denom))
        if data is None:
            return None
        return unmarshal_binary_length_prefixed(data, Collection)

    def get_collections(self) -> list[Collection]:
        """Return all stored collections."""
        return list(self.iterate_collections())

    def get_denoms(self) -> list[str]:
        """Return the denominations of all stored collections."""
        return [collection.denom for collection in self.iterate_collections()]

    # NFTs

    def is_nft(self, denom: str, nft_id: str) -> bool:
        """Return whether the NFT ``nft_id`` of ``denom`` exists."""
        collection = self.get_collection(denom)
        return collection is not None and collection.contains_nft(nft_id)

    def get_nft(self, denom: str, nft_id: str) -> BaseNFT:
        """Return the NFT ``nft_id`` of ``denom``."""
        collection = self.get_collection(denom)
        if collection is None:
            raise UnknownCollectionError(f"collection of {denom} doesn't exist")
        return collection.get_nft(nft_id)

    def update_nft(self, denom: str, nft: BaseNFT) -> None:
        """Replace an existing NFT, moving its ownership record if the owner changed."""
        collection = self.get_collection(denom)
        if collection is None:
            raise UnknownCollectionError(f"collection #{denom} doesn't exist")
        old_nft = collection.get_nft(nft.id)
        if old_nft.owner != nft.owner:
            self.swap_owners(denom, nft.id, old_nft.owner, nft.owner)
        self.set_collection(denom, collection.update_nft(nft))

    def mint_nft(self, denom: str, nft: BaseNFT) -> None:
        """Add a new NFT to its collection and to its owner's IDs."""
        collection = self.get_collection(denom)
        if collection is not None:
            collection = collection.add_nft(nft)
        else:
            collection = Collection(denom, NFTs(nft))
        self.set_collection(denom, collection)

        id_collection = self.get_owner_by_denom(nft.owner, denom) or IDCollection(denom)
        id_collection = id_collection.add_id(nft.id)
        self.set_owner_by_denom(nft.owner, denom, id_collection.ids)

    def delete_nft(self, denom: str, nft_id: str) -> None:
        """Remove an NFT from its collection and from its owner's IDs."""
        collection = self.get_collection(denom)
        if collection is None:
            raise UnknownCollectionError(f"collection of {denom} doesn't exist")
        nft = collection.get_nft(nft_id)
        id_collection = self.get_owner_by_denom(nft.owner, denom)
        if id_collection is None:
            raise UnknownCollectionError(
                f"id collection #{denom} doesn't exist for owner {nft.owner}"
            )
        id_collection = id_collection.delete_id(nft.id)
        self.set_owner_by_denom(nft.owner, denom, id_collection.ids)
        self.set_collection(denom, collection.delete_nft(nft))

    # Owners

    def get_owners(self) -> list[Owner]:
        """Return every owner once, in key order."""
        seen: set[bytes] = set()
        owners = []
        for owner in self.iterate_owners():
            if bytes(owner.address) not in seen:
                seen.add(bytes(owner.address))
                owners.append(owner)
        return owners

    def get_owner(self, address: AccAddress) -> Owner:
        """Return all the ID collections owned by ``address``."""
        collections = (c for _, c in self.iterate_id_collections(owners_key(address)))
        return Owner(address, IDCollections(*collections))

    def get_owner_by_denom(self, owner: AccAddress, denom: str) -> IDCollection | None:
        """Return the ``denom`` IDs owned by ``owner``, or None."""
        data = self.store.get(owner_key(owner, denom))
        if data is None:
            return None
        return unmarshal_binary_length_prefixed(data, IDCollection)

    def set_owner_by_denom(self, owner: AccAddress, denom: str, ids: Iterable[str]) -> None:
        """Store the ``denom`` IDs owned by ``owner``."""
        id_collection = IDCollection(denom, tuple(ids))
        self.store.set(owner_key(owner, denom), marshal_binary_length_prefixed(id_collection))

    def set_owner(self, owner: Owner) -> None:
        """Store every ID collection of ``owner``."""
        for id_collection in owner.id_collections:
            self.set_owner_by_denom(owner.address, id_collection.denom, id_collection.ids)

    def set_owners(self, owners: Iterable[Owner]) -> None:
        """Store every given owner."""
        for owner in owners:
            self.set_owner(owner)

    def iterate_id_collections(
        self, prefix: bytes
    ) -> Iterator[tuple[AccAddress, IDCollection]]:
        """Yield ``(owner, id_collection)`` for every record under ``prefix``."""
        for key, value in self.store.iterate_prefix(prefix):
            address, _ = split_owner_key(key)
            yield address, unmarshal_binary_length_prefixed(value, IDCollection)

    def iterate_owners(self) -> Iterator[Owner]:
        """Yield the owner of every ownership record, in key order."""
        for key, _ in self.store.iterate_prefix(OWNERS_KEY_PREFIX):
            address, _ = split_owner_key(key)
            yield self.get_owner(address)

    def swap_owners(
        self,
        denom: str,
        nft_id: str,
        old_address: AccAddress,
        new_address: AccAddress,
    ) -> None:
        """Move the ID ``nft_id`` of ``denom`` from one owner to another."""
        old_collection = self.get_owner_by_denom(old_address, denom)
        if old_collection is None:
            raise UnknownCollectionError(
                f"id collection {denom} doesn't exist for owner {old_address}"
            )
        old_collection = old_collection.delete_id(nft_id)
        self.set_owner_by_denom(old_address, denom, old_collection.ids)

        new_collection = self.get_owner_by_denom(new_address, denom) or IDCollection(denom)
        new_collection = new_collection.add_id(nft_id)
        self.set_owner_by_denom(new_address, denom, new_collection.ids)