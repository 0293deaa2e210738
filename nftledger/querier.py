"""Read-only query endpoints of the NFT ledger."""

from __future__ import annotations

from typing import Callable, Sequence

from nftledger.codec import marshal_json
from nftledger.collection import Collections
from nftledger.errors import (
    JSONMarshalError,
    NFTError,
    UnknownCollectionError,
    UnknownNFTError,
    UnknownRequestError,
)
from nftledger.keeper import Keeper
from nftledger.owners import IDCollection, IDCollections, Owner
from nftledger.queries import QueryBalanceParams, QueryCollectionParams, QueryNFTParams

QUERY_SUPPLY = "supply"
QUERY_OWNER = "owner"
QUERY_OWNER_BY_DENOM = "ownerByDenom"
QUERY_COLLECTION = "collection"
QUERY_DENOMS = "denoms"
QUERY_NFT = "nft"

Querier = Callable[..., bytes]


def _encode(value: object) -> bytes:
    try:
        return marshal_json(value)
    except (TypeError, ValueError) as err:
        raise JSONMarshalError(str(err)) from err


def _query_supply(keeper: Keeper, data: bytes) -> bytes:
    try:
        params = QueryCollectionParams.from_json(data)
    except ValueError as err:
        raise UnknownRequestError(f"incorrectly formatted request data {err}") from err
    collection = keeper.get_collection(params.denom)
    if collection is None:
        raise UnknownCollectionError(f"unknown denom {params.denom}")
    return str(collection.supply()).encode("utf-8")


def _query_owner(keeper: Keeper, data: bytes) -> bytes:
    try:
        params = QueryBalanceParams.from_json(data)
    except ValueError as err:
        raise UnknownRequestError(str(err)) from err
    return _encode(keeper.get_owner(params.owner))


def _query_owner_by_denom(keeper: Keeper, data: bytes) -> bytes:
    try:
        params = QueryBalanceParams.from_json(data)
    except ValueError as err:
        raise UnknownRequestError(str(err)) from err
    id_collection = keeper.get_owner_by_denom(params.owner, params.denom)
    if id_collection is None:
        id_collection = IDCollection(params.denom)
    owner = Owner(params.owner, IDCollections(id_collection).sort())
    return _encode(owner)


def _query_collection(keeper: Keeper, data: bytes) -> bytes:
    try:
        params = QueryCollectionParams.from_json(data)
    except ValueError as err:
        raise UnknownRequestError(str(err)) from err
    collection = keeper.get_collection(params.denom)
    if collection is None:
        raise UnknownCollectionError(f"unknown denom {params.denom}")
    return _encode(Collections(collection))


def _query_denoms(keeper: Keeper, data: bytes) -> bytes:
    denoms = keeper.get_denoms()
    return _encode(denoms or None)


def _query_nft(keeper: Keeper, data: bytes) -> bytes:
    try:
        params = QueryNFTParams.from_json(data)
    except ValueError as err:
        raise UnknownRequestError(str(err)) from err
    try:
        nft = keeper.get_nft(params.denom, params.token_id)
    except NFTError as err:
        raise UnknownNFTError(
            f"invalid NFT #{params.token_id} from collection {params.denom}"
        ) from err
    return _encode(nft)


_ENDPOINTS: dict[str, Callable[[Keeper, bytes], bytes]] = {
    QUERY_SUPPLY: _query_supply,
    QUERY_OWNER: _query_owner,
    QUERY_OWNER_BY_DENOM: _query_owner_by_denom,
    QUERY_COLLECTION: _query_collection,
    QUERY_DENOMS: _query_denoms,
    QUERY_NFT: _query_nft,
}


def new_querier(keeper: Keeper) -> Querier:
    """Return a function answering ``querier(path, data)`` with JSON bytes."""

    def querier(path: Sequence[str], data: bytes = b"") -> bytes:
        handler = _ENDPOINTS.get(path[0]) if path else None
        if handler is None:
            raise UnknownRequestError("unknown nft query endpoint")
        return handler(keeper, data)

    return querier