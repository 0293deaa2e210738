"""Human-readable rendering of stored ledger records."""

from __future__ import annotations

from typing import Sequence

from nftledger.codec import unmarshal_binary_length_prefixed
from nftledger.collection import Collection
from nftledger.keys import COLLECTIONS_KEY_PREFIX, MODULE_NAME, OWNERS_KEY_PREFIX
from nftledger.owners import IDCollection


def decode_store(pair_a: Sequence[bytes], pair_b: Sequence[bytes]) -> str:
    """Render two ``(key, value)`` store records of the same kind, one per line.

    Raises ValueError when the key prefix is not one of the ledger's.
    """
    key_a, value_a = pair_a
    _, value_b = pair_b
    prefix = bytes(key_a[:1])
    if prefix == COLLECTIONS_KEY_PREFIX:
        kind: type = Collection
    elif prefix == OWNERS_KEY_PREFIX:
        kind = IDCollection
    else:
        raise ValueError(f"invalid {MODULE_NAME} key prefix {prefix.hex().upper()}")
    first = unmarshal_binary_length_prefixed(value_a, kind)
    second = unmarshal_binary_length_prefixed(value_b, kind)
    return f"{first}\n{second}"