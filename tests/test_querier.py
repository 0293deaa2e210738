import json

import pytest

from nftledger.collection import Collections
from nftledger.errors import UnknownCollectionError, UnknownNFTError, UnknownRequestError
from nftledger.keeper import Keeper
from nftledger.keys import AccAddress
from nftledger.nft import BaseNFT
from nftledger.owners import IDCollection, IDCollections, Owner
from nftledger.querier import new_querier
from nftledger.queries import QueryBalanceParams, QueryCollectionParams, QueryNFTParams

DENOM = "test-denom"
DENOM2 = "test-denom2"
ID = "1"
ID2 = "2"
ADDRESS = AccAddress.from_hex("A58856F0FD53BF058B4909A21AEC019107BA6100")
TOKEN_URI = "https://google.com/token-1.json"


@pytest.fixture
def keeper():
    k = Keeper()
    k.mint_nft(DENOM, BaseNFT(ID, ADDRESS, TOKEN_URI))
    return k


def _owner_from(res: bytes) -> Owner:
    document = json.loads(res)
    assert document["type"] == "cosmos-sdk/Owner"
    return Owner._from_json_value(document["value"])


def test_unknown_endpoint():
    querier = new_querier(Keeper())
    with pytest.raises(UnknownRequestError):
        querier(["foo", "bar"], b"")


def test_query_supply(keeper):
    querier = new_querier(keeper)
    with pytest.raises(UnknownRequestError):
        querier(["supply"], b"?")

    data = QueryCollectionParams(DENOM2).to_json().encode()
    with pytest.raises(UnknownCollectionError):
        querier(["supply"], data)

    res = querier(["supply"], QueryCollectionParams(DENOM).to_json().encode())
    assert int(res.decode()) == 1


def test_query_collection(keeper):
    querier = new_querier(keeper)
    with pytest.raises(UnknownRequestError):
        querier(["collection"], b"?")

    with pytest.raises(UnknownCollectionError):
        querier(["collection"], QueryCollectionParams(DENOM2).to_json().encode())

    res = querier(["collection"], QueryCollectionParams(DENOM).to_json().encode())
    collections = Collections.from_json(res)
    assert len(collections) == 1
    assert len(collections[0].nfts) == 1
    assert collections[0].denom == DENOM


def test_query_owner(keeper):
    denom2 = "test_denom2"
    keeper.mint_nft(denom2, BaseNFT(ID, ADDRESS, TOKEN_URI))
    querier = new_querier(keeper)

    with pytest.raises(UnknownRequestError):
        querier(["ownerByDenom"], b"?")

    res = querier(["ownerByDenom"], QueryBalanceParams(ADDRESS, DENOM).to_json().encode())
    id_collection1 = IDCollection(DENOM, (ID,))
    expected = Owner(ADDRESS, IDCollections(id_collection1))
    assert str(_owner_from(res)) == str(expected)

    with pytest.raises(UnknownRequestError):
        querier(["owner"], b"?")

    res = querier(["owner"], QueryBalanceParams(ADDRESS, "").to_json().encode())
    out = _owner_from(res)
    id_collection2 = IDCollection(denom2, (ID,))
    expected_all = IDCollections(id_collection2, id_collection1).sort()
    assert out.address == ADDRESS
    assert str(out.id_collections.sort()) == str(expected_all)
    assert out.supply() == 2


def test_query_owner_by_denom_without_record():
    querier = new_querier(Keeper())
    res = querier(["ownerByDenom"], QueryBalanceParams(ADDRESS, DENOM).to_json().encode())
    out = _owner_from(res)
    assert out.supply() == 0
    assert [c.denom for c in out.id_collections] == [DENOM]


def test_query_nft(keeper):
    querier = new_querier(keeper)
    with pytest.raises(UnknownRequestError):
        querier(["nft"], b"?")

    with pytest.raises(UnknownNFTError):
        querier(["nft"], QueryNFTParams(DENOM2, ID2).to_json().encode())

    res = querier(["nft"], QueryNFTParams(DENOM, ID).to_json().encode())
    document = json.loads(res)
    assert document["type"] == "cosmos-sdk/BaseNFT"
    value = document["value"]
    out = BaseNFT(value["id"], AccAddress.from_bech32(value["owner"]), value["token_uri"])
    assert str(out) == str(BaseNFT(ID, ADDRESS, TOKEN_URI))


def test_query_denoms(keeper):
    keeper.mint_nft(DENOM2, BaseNFT(ID, ADDRESS, TOKEN_URI))
    querier = new_querier(keeper)
    res = querier(["denoms"], b"")
    out = json.loads(res)
    assert sorted(out) == [DENOM, DENOM2]


def test_query_denoms_empty():
    assert new_querier(Keeper())(["denoms"]) == b"null"