# nftledger

`nftledger` keeps a ledger of non-fungible tokens (NFTs) in a key-value store. Tokens are grouped into collections by *denom*, which is the collection name. The ledger also records which token IDs each owner holds in each collection, and keeps those records in step with the collections.

## What it provides

- **Tokens and collections** (`nftledger.nft`, `nftledger.collection`)
  - `BaseNFT` is a single token with an `id`, an `owner` address and a `token_uri`.
  - `NFTs` and `Collections` are immutable sets kept sorted by id or denom. `find` returns the entry or `None`. `append`, `update` and `remove` each return a new set.
  - `to_json` and `from_json` give both sets a JSON object form, keyed by id or by denom.
  - `Collection` holds the tokens of one denom. `add_nft`, `update_nft` and `delete_nft` return a new collection. `get_nft`, `contains_nft` and `supply` read from it.
- **Owners** (`nftledger.owners`)
  - `IDCollection`, `IDCollections` and `Owner` record the token IDs that each address holds, per denom.
- **Addresses and store keys** (`nftledger.keys`)
  - `AccAddress` is a bytes address that prints in bech32 form with the `cosmos` prefix. Build one with `AccAddress.from_hex` or `AccAddress.from_bech32`.
  - `collection_key`, `owners_key`, `owner_key` and `split_owner_key` build and split store keys.
- **Messages** (`nftledger.msgs`)
  - `MsgTransferNFT`, `MsgEditNFTMetadata`, `MsgMintNFT` and `MsgBurnNFT`.
  - Each message has `route()`, `msg_type()`, `validate_basic()`, `sign_bytes()` and `signers()`. `validate_basic()` raises when the message is malformed. `sign_bytes()` returns canonical JSON with sorted keys.
- **Encoding** (`nftledger.codec`)
  - `marshal_json`, `sort_json`, `marshal_binary_length_prefixed` and `unmarshal_binary_length_prefixed` encode and decode the ledger's types.
- **Keeper** (`nftledger.keeper`)
  - `Keeper` works on top of an in-memory `KVStore`.
  - It mints, updates, deletes and looks up tokens with `mint_nft`, `update_nft`, `delete_nft`, `get_nft` and `is_nft`.
  - It reads and writes ownership records with `get_owner`, `get_owners`, `set_owner`, `set_owners` and `swap_owners`.
- **Queries** (`nftledger.querier`, `nftledger.queries`)
  - `new_querier(keeper)` returns a function `querier(path, data)` that answers with JSON bytes.
  - The endpoints are `supply`, `owner`, `ownerByDenom`, `collection`, `denoms` and `nft`.
  - `QueryCollectionParams`, `QueryBalanceParams` and `QueryNFTParams` build the request data with `to_json()`.
- **Checks and genesis**
  - `supply_invariant(keeper)` and `all_invariants(keeper)` return a check. Calling the check gives `(message, broken)`.
  - `GenesisState`, `default_genesis_state()` and `validate_genesis()` describe and check the initial state.
  - `nftledger.sim_genesis.randomized_gen_state(rng, accounts)` builds a random genesis state for simulations.
  - `nftledger.decoder.decode_store` renders two stored records as text.

## Installing

```
pip install .
```

## Example

```python
from nftledger.invariants import supply_invariant
from nftledger.keeper import Keeper, KVStore
from nftledger.keys import AccAddress
from nftledger.nft import BaseNFT

keeper = Keeper(KVStore())
alice = AccAddress.from_hex("01" * 20)
bob = AccAddress.from_hex("02" * 20)

keeper.mint_nft("kitties", BaseNFT("1", alice, "https://example.com/token-1.json"))
keeper.update_nft("kitties", BaseNFT("1", bob, "https://example.com/token-1.json"))

print(keeper.get_nft("kitties", "1").owner == bob)  # True
message, broken = supply_invariant(keeper)()
print(broken)  # False
```

Failures raise subclasses of `nftledger.errors.NFTError`, such as `UnknownCollectionError`, `UnknownNFTError`, `NFTAlreadyExistsError` and `InvalidAddressError`.

## What it does not do

`nftledger` is a library only and has no command-line tool. `KVStore` keeps its data in memory, so nothing is saved to disk. The package also does not run a server, sign or broadcast transactions, or apply messages to the keeper. Messages can be built, validated and encoded, but applying their effect is up to the caller, using the `Keeper` methods.

## Running the tests

```
pip install ".[test]"
pytest
```