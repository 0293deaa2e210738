"""Consistency checks over the stored NFT ledger."""

from __future__ import annotations

from collections import Counter
from typing import Callable

from nftledger.keeper import Keeper
from nftledger.keys import MODULE_NAME

Invariant = Callable[[], "tuple[str, bool]"]


def _format_invariant(module: str, name: str, message: str) -> str:
    return f"{module}: {name} invariant\n{message}\n"


def supply_invariant(keeper: Keeper) -> Invariant:
    """Return a check that each collection's supply matches what its owners hold.

    The check returns ``(message, broken)``.
    """

    def invariant() -> tuple[str, bool]:
        collections_supply = {
            collection.denom: collection.supply()
            for collection in keeper.iterate_collections()
        }
        owners_supply: Counter[str] = Counter()
        for owner in keeper.get_owners():
            for id_collection in owner.id_collections:
                owners_supply[id_collection.denom] += id_collection.supply()

        mismatches = [
            (denom, supply)
            for denom, supply in collections_supply.items()
            if supply != owners_supply[denom]
        ]
        details = "".join(
            f"total {denom} NFTs supply invariance:\n"
            f"\ttotal {denom} NFTs supply: {supply}\n"
            f"\tsum of {denom} NFTs by owner: {owners_supply[denom]}\n"
            for denom, supply in mismatches
        )
        message = _format_invariant(
            MODULE_NAME,
            "supply",
            f"{len(mismatches)} NFT supply invariants found\n{details}",
        )
        return message, bool(mismatches)

    return invariant


def all_invariants(keeper: Keeper) -> Invariant:
    """Return a check that runs every invariant of the ledger."""
    supply = supply_invariant(keeper)

    def invariant() -> tuple[str, bool]:
        return supply()

    return invariant