"""Randomly generated genesis states for simulations."""

from __future__ import annotations

import json
import random
from typing import Iterable

from nftledger.codec import to_json_value
from nftledger.collection import Collection, Collections
from nftledger.genesis import GenesisState
from nftledger.keys import AccAddress
from nftledger.nft import NFTs, BaseNFT
from nftledger.owners import IDCollection, IDCollections, Owner

KITTIES = "crypto-kitties"
DOGGOS = "crypto-doggos"

_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def random_string(rng: random.Random, length: int) -> str:
    """Return ``length`` random ASCII letters."""
    return "".join(rng.choice(_LETTERS) for _ in range(length))


def randomized_gen_state(rng: random.Random, accounts: Iterable[AccAddress]) -> GenesisState:
    """Build a genesis state where about 10% of accounts own one NFT.

    Each NFT goes with equal chance to the doggos or the kitties collection.
    """
    collections = {DOGGOS: Collection(DOGGOS, NFTs()), KITTIES: Collection(KITTIES, NFTs())}
    owners = []
    for address in accounts:
        if rng.randrange(100) >= 10:
            continue
        nft = BaseNFT(random_string(rng, 10), address, random_string(rng, 45))
        denom = DOGGOS if rng.randrange(100) < 50 else KITTIES
        collections[denom] = collections[denom].add_nft(nft)
        owners.append(Owner(address, IDCollections(IDCollection(denom, (nft.id,)))))

    state = GenesisState(tuple(owners), Collections(*collections.values()))
    print(
        "Selected randomly generated NFT genesis state:\n"
        f"{json.dumps(to_json_value(state), indent=2)}\n"
    )
    return state