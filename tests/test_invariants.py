from nftledger.collection import Collection
from nftledger.invariants import all_invariants, supply_invariant
from nftledger.keeper import Keeper
from nftledger.keys import AccAddress
from nftledger.nft import NFTs, BaseNFT

DENOM = "test-denom"
ADDRESS = AccAddress.from_hex("A58856F0FD53BF058B4909A21AEC019107BA6100")
ADDRESS2 = AccAddress.from_hex("A58856F0FD53BF058B4909A21AEC019107BA6101")
TOKEN_URI = "https://google.com/token-1.json"


def test_empty_ledger_is_consistent():
    message, broken = supply_invariant(Keeper())()
    assert broken is False
    assert message == "nft: supply invariant\n0 NFT supply invariants found\n\n"


def test_minted_nfts_are_consistent():
    keeper = Keeper()
    keeper.mint_nft(DENOM, BaseNFT("1", ADDRESS, TOKEN_URI))
    keeper.mint_nft(DENOM, BaseNFT("2", ADDRESS2, TOKEN_URI))
    message, broken = supply_invariant(keeper)()
    assert not broken
    assert "0 NFT supply invariants found" in message


def test_collection_without_owner_record_is_broken():
    keeper = Keeper()
    keeper.mint_nft(DENOM, BaseNFT("1", ADDRESS, TOKEN_URI))
    collection = keeper.get_collection(DENOM)
    keeper.set_collection(DENOM, collection.add_nft(BaseNFT("2", ADDRESS, TOKEN_URI)))

    message, broken = supply_invariant(keeper)()
    assert broken
    assert "1 NFT supply invariants found" in message
    assert f"total {DENOM} NFTs supply: 2" in message
    assert f"sum of {DENOM} NFTs by owner: 1" in message


def test_owner_records_without_collection_are_ignored():
    keeper = Keeper()
    keeper.set_owner_by_denom(ADDRESS, DENOM, ["1"])
    _, broken = supply_invariant(keeper)()
    assert broken is False


def test_all_invariants_matches_supply_invariant():
    keeper = Keeper()
    keeper.set_collection(DENOM, Collection(DENOM, NFTs(BaseNFT("1", ADDRESS, TOKEN_URI))))
    assert all_invariants(keeper)() == supply_invariant(keeper)()
    assert all_invariants(keeper)()[1] is True