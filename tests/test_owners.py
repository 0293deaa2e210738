import pytest

from nftledger.errors import UnknownCollectionError, UnknownNFTError
from nftledger.keys import AccAddress
from nftledger.owners import IDCollection, IDCollections, Owner

DENOM, DENOM2 = "denom", "test-denom2"
ID, ID2, ID3 = "1", "2", "3"
PAIR = [ID, ID2]
ADDRESS = AccAddress.from_hex("A58856F0FD53BF058B4909A21AEC019107BA6100")


def rendered(denom, ids):
    return f"Denom: \t\t\t{denom}\nIDs:        \t{','.join(ids)}"


def test_new_id_collection():
    ids = IDCollection(DENOM, [ID, ID2, ID3])
    assert ids.denom == DENOM
    assert len(ids.ids) == 3


def test_new_id_collection_trims_and_sorts():
    ids = IDCollection(f"   {DENOM}  ", [ID3, ID, ID2])
    assert (ids.denom, ids.ids) == (DENOM, (ID, ID2, ID3))


@pytest.mark.parametrize("nft_id, present", [(ID, True), (ID2, True), (ID3, False)])
def test_id_collection_exists(nft_id, present):
    assert IDCollection(DENOM, [ID2, ID]).exists(nft_id) is present


def test_id_collection_add_id():
    grown = IDCollection(DENOM, PAIR).add_id(ID3)
    assert len(grown.ids) == 3
    assert grown.exists(ID3)


def test_id_collection_delete_id():
    original = IDCollection(DENOM, PAIR)
    with pytest.raises(UnknownNFTError):
        original.delete_id(ID3)
    assert original.supply() == 2

    shrunk = original.delete_id(ID2)
    assert len(shrunk.ids) == 1
    assert not shrunk.exists(ID2)


def test_id_collection_supply():
    assert IDCollection().supply() == 0
    current = IDCollection(DENOM, PAIR)
    assert current.supply() == 2
    current = current.delete_id(ID)
    assert current.supply() == 1
    current = current.delete_id(ID2)
    assert current.supply() == 0
    assert current.add_id(ID).supply() == 1


def test_id_collection_string():
    assert str(IDCollection(DENOM, PAIR)) == rendered(DENOM, PAIR)


def test_id_collections_string():
    assert str(IDCollections()) == ""
    both = IDCollections(IDCollection(DENOM, PAIR), IDCollection(DENOM2, PAIR))
    assert str(both) == rendered(DENOM, PAIR) + "\n" + rendered(DENOM2, PAIR)


@pytest.fixture
def first_and_second():
    return IDCollection(DENOM, [ID]), IDCollection(DENOM2, [ID2])


def test_id_collections_append_sorts(first_and_second):
    first, second = first_and_second
    merged = IDCollections(second).append(first)
    assert [c.denom for c in merged] == [DENOM, DENOM2]
    assert merged[1].ids == (ID2,)


def test_id_collections_sort(first_and_second):
    first, second = first_and_second
    unsorted = IDCollections(second, first)
    assert [c.denom for c in unsorted] == [DENOM2, DENOM]
    assert unsorted.sort() == IDCollections(first, second)


def test_new_owner():
    owner = Owner(ADDRESS, [IDCollection(DENOM, PAIR), IDCollection(DENOM2, PAIR)])
    assert str(owner.address) == str(ADDRESS)
    assert len(owner.id_collections) == 2


@pytest.mark.parametrize("denoms, supply", [((), 0), ((DENOM,), 2), ((DENOM, DENOM2), 4)])
def test_owner_supply(denoms, supply):
    owner = Owner(ADDRESS, [IDCollection(denom, PAIR) for denom in denoms])
    assert owner.supply() == supply


def test_owner_get_id_collection():
    owned = IDCollection(DENOM, PAIR)
    assert Owner(ADDRESS, [owned]).get_id_collection(DENOM2) is None

    owner = Owner(ADDRESS, [owned, IDCollection(DENOM2, PAIR)])
    for denom in (DENOM, DENOM2):
        assert str(owner.get_id_collection(denom)) == rendered(denom, PAIR)


def test_owner_update_id_collection():
    single = IDCollection(DENOM, [ID])
    other = IDCollection(DENOM2, PAIR)
    replacement = IDCollection(DENOM, PAIR)

    owner = Owner(ADDRESS, [single])
    assert owner.supply() == 1
    with pytest.raises(UnknownCollectionError):
        owner.update_id_collection(other)

    updated = owner.update_id_collection(replacement)
    assert updated.supply() == 2
    assert len(updated.get_id_collection(DENOM).ids) == 2

    owner = Owner(ADDRESS, [single, other])
    assert owner.supply() == 3
    assert owner.update_id_collection(replacement).supply() == 4


@pytest.mark.parametrize("denom, nft_id", [(DENOM2, ID), (DENOM, ID3)])
def test_owner_delete_missing_id(denom, nft_id):
    owner = Owner(ADDRESS, [IDCollection(DENOM, PAIR)])
    with pytest.raises(UnknownNFTError):
        owner.delete_id(denom, nft_id)
    assert owner.supply() == 2


def test_owner_delete_id():
    owner = Owner(ADDRESS, [IDCollection(DENOM, PAIR)]).delete_id(DENOM, ID)
    assert len(owner.get_id_collection(DENOM).ids) == 1


def test_owner_string():
    owner = Owner(ADDRESS, [IDCollection(DENOM, [ID])])
    assert str(owner) == (
        f"\n\tAddress: \t\t\t\t{ADDRESS}\n\tIDCollections:        \t" + rendered(DENOM, [ID])
    )


def test_owner_accepts_missing_address():
    owner = Owner(None)
    assert owner.address.empty()
    assert owner.supply() == 0