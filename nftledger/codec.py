"""JSON and length-prefixed binary encoding of the ledger's types."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any, Callable

from nftledger.collection import Collection
from nftledger.keys import AccAddress
from nftledger.msgs import MsgBurnNFT, MsgEditNFTMetadata, MsgMintNFT, MsgTransferNFT
from nftledger.nft import NFTs, BaseNFT, _parse_address
from nftledger.owners import IDCollection, Owner

_REGISTERED: dict[type, str] = {
    BaseNFT: "cosmos-sdk/BaseNFT",
    IDCollection: "cosmos-sdk/IDCollection",
    Collection: "cosmos-sdk/Collection",
    Owner: "cosmos-sdk/Owner",
    MsgTransferNFT: MsgTransferNFT.AMINO_NAME,
    MsgEditNFTMetadata: MsgEditNFTMetadata.AMINO_NAME,
    MsgMintNFT: MsgMintNFT.AMINO_NAME,
    MsgBurnNFT: MsgBurnNFT.AMINO_NAME,
}

_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _dumps(value: Any, sort_keys: bool) -> bytes:
    text = json.dumps(value, separators=(",", ":"), sort_keys=sort_keys, ensure_ascii=False)
    for char, escape in _GO_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


def _nft_value(nft: BaseNFT) -> dict[str, Any]:
    value: dict[str, Any] = {}
    if nft.id:
        value["id"] = nft.id
    value["owner"] = str(nft.owner)
    value["token_uri"] = nft.token_uri
    return value


def _decode_nft(value: Any) -> BaseNFT:
    if not isinstance(value, dict):
        raise ValueError("NFT must be encoded as a JSON object")
    nft_id = value.get("id") or ""
    token_uri = value.get("token_uri") or ""
    if not isinstance(nft_id, str) or not isinstance(token_uri, str):
        raise ValueError("NFT id and token URI must be strings")
    return BaseNFT(nft_id, _parse_address(value.get("owner")), token_uri)


def _decode_collection(value: Any) -> Collection:
    if not isinstance(value, dict):
        raise ValueError("collection must be encoded as a JSON object")
    denom = value.get("denom") or ""
    if not isinstance(denom, str):
        raise ValueError("denom must be a string")
    return Collection(denom, NFTs._from_json_value(value.get("nfts")))


_DECODERS: dict[type, Callable[[Any], Any]] = {
    BaseNFT: _decode_nft,
    IDCollection: IDCollection._from_json_value,
    Collection: _decode_collection,
    Owner: Owner._from_json_value,
    MsgTransferNFT: MsgTransferNFT._from_json_value,
    MsgEditNFTMetadata: MsgEditNFTMetadata._from_json_value,
    MsgMintNFT: MsgMintNFT._from_json_value,
    MsgBurnNFT: MsgBurnNFT._from_json_value,
}


def to_json_value(obj: Any) -> Any:
    """Convert ``obj`` into plain JSON data, without a type wrapper."""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, AccAddress):
        return str(obj)
    if isinstance(obj, BaseNFT):
        return _nft_value(obj)
    json_value = getattr(obj, "_json_value", None)
    if callable(json_value):
        return json_value()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_json_value(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Mapping):
        return {str(key): to_json_value(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_json_value(item) for item in obj]
    raise TypeError(f"cannot encode {type(obj).__name__} as JSON")


def marshal_json(obj: Any) -> bytes:
    """Encode ``obj`` as JSON; registered types are wrapped as {"type", "value"}."""
    value = to_json_value(obj)
    name = _REGISTERED.get(type(obj))
    if name is not None:
        value = {"type": name, "value": value}
    return _dumps(value, sort_keys=False)


def sort_json(data: str | bytes) -> bytes:
    """Re-encode a JSON document compactly with every object's keys sorted."""
    return _dumps(json.loads(data), sort_keys=True)


def _encode_uvarint(number: int) -> bytes:
    out = bytearray()
    while number >= 0x80:
        out.append((number & 0x7F) | 0x80)
        number >>= 7
    out.append(number)
    return bytes(out)


def _decode_uvarint(data: bytes) -> tuple[int, int]:
    result = 0
    shift = 0
    for position, byte in enumerate(data[:10]):
        result |= (byte & 0x7F) << shift
        if byte < 0x80:
            return result, position + 1
        shift += 7
    raise ValueError("invalid length prefix")


def marshal_binary_length_prefixed(obj: Any) -> bytes:
    """Encode ``obj`` as its JSON bytes preceded by their length as a uvarint."""
    payload = marshal_json(obj)
    return _encode_uvarint(len(payload)) + payload


def unmarshal_binary_length_prefixed(data: bytes, kind: type) -> Any:
    """Decode bytes made by :func:`marshal_binary_length_prefixed` into ``kind``."""
    name = _REGISTERED.get(kind)
    if name is None:
        raise TypeError(f"{kind.__name__} is not a registered type")
    length, offset = _decode_uvarint(bytes(data))
    payload = bytes(data[offset:])
    if len(payload) != length:
        raise ValueError(f"length prefix {length} does not match payload of {len(payload)} bytes")
    document = json.loads(payload)
    if not isinstance(document, dict) or document.get("type") != name:
        raise ValueError(f"payload is not a {name}")
    return _DECODERS[kind](document.get("value"))