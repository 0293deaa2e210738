"""Transaction messages of the NFT ledger and the events they emit."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, ClassVar

from nftledger.errors import InvalidAddressError, InvalidCollectionError, InvalidNFTError
from nftledger.keys import MODULE_NAME, ROUTER_KEY, AccAddress
from nftledger.nft import _parse_address

EVENT_TYPE_TRANSFER = "transfer_nft"
EVENT_TYPE_EDIT_NFT_METADATA = "edit_nft_metadata"
EVENT_TYPE_MINT_NFT = "mint_nft"
EVENT_TYPE_BURN_NFT = "burn_nft"

ATTRIBUTE_VALUE_CATEGORY = MODULE_NAME

ATTRIBUTE_KEY_SENDER = "sender"
ATTRIBUTE_KEY_RECIPIENT = "recipient"
ATTRIBUTE_KEY_OWNER = "owner"
ATTRIBUTE_KEY_NFT_ID = "nft-id"
ATTRIBUTE_KEY_NFT_TOKEN_URI = "token-uri"
ATTRIBUTE_KEY_DENOM = "denom"

_ADDRESS_FIELDS = frozenset({"sender", "recipient"})
_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _canonical_json(value: Any) -> bytes:
    text = json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    for char, escape in _GO_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


class _Msg:
    """Behaviour shared by every NFT message."""

    AMINO_NAME: ClassVar[str] = ""
    TYPE: ClassVar[str] = ""

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.name in _ADDRESS_FIELDS:
                if value is None:
                    value = AccAddress()
                elif not isinstance(value, AccAddress):
                    value = AccAddress(value)
            elif isinstance(value, str):
                value = value.strip()
            object.__setattr__(self, f.name, value)

    def route(self) -> str:
        """Return the router key the message is sent to."""
        return ROUTER_KEY

    def msg_type(self) -> str:
        """Return the message type name."""
        return self.TYPE

    def validate_basic(self) -> None:
        raise NotImplementedError

    def sign_bytes(self) -> bytes:
        """Return the canonical, key-sorted JSON bytes to sign."""
        return _canonical_json({"type": self.AMINO_NAME, "value": self._json_value()})

    def signers(self) -> list[AccAddress]:
        """Return the addresses that must sign the message."""
        return [self.sender]

    def _json_value(self) -> dict[str, Any]:
        return {
            f.name: str(getattr(self, f.name)) if f.name in _ADDRESS_FIELDS
            else getattr(self, f.name)
            for f in dataclasses.fields(self)
        }

    @classmethod
    def _from_json_value(cls, value: Any):
        if not isinstance(value, dict):
            raise ValueError(f"{cls.__name__} must be encoded as a JSON object")
        kwargs = {}
        for f in dataclasses.fields(cls):
            raw = value.get(f.name)
            if f.name in _ADDRESS_FIELDS:
                kwargs[f.name] = _parse_address(raw)
            else:
                raw = raw or ""
                if not isinstance(raw, str):
                    raise ValueError(f"{f.name} must be a string")
                kwargs[f.name] = raw
        return cls(**kwargs)


@dataclass(frozen=True)
class MsgTransferNFT(_Msg):
    """Transfer an NFT from the sender to the recipient."""

    AMINO_NAME: ClassVar[str] = "cosmos-sdk/MsgTransferNFT"
    TYPE: ClassVar[str] = "transfer_nft"

    sender: AccAddress = field(default_factory=AccAddress)
    recipient: AccAddress = field(default_factory=AccAddress)
    denom: str = ""
    id: str = ""

    def route(self) -> str:
        return super().route()

    def msg_type(self) -> str:
        return super().msg_type()

    def validate_basic(self) -> None:
        """Raise if the message is malformed."""
        if not self.denom.strip():
            raise InvalidCollectionError()
        if self.sender.empty():
            raise InvalidAddressError("invalid sender address")
        if self.recipient.empty():
            raise InvalidAddressError("invalid recipient address")
        if not self.id.strip():
            raise InvalidCollectionError()

    def sign_bytes(self) -> bytes:
        return super().sign_bytes()

    def signers(self) -> list[AccAddress]:
        return super().signers()


@dataclass(frozen=True)
class MsgEditNFTMetadata(_Msg):
    """Replace the token URI of an NFT."""

    AMINO_NAME: ClassVar[str] = "cosmos-sdk/MsgEditNFTMetadata"
    TYPE: ClassVar[str] = "edit_nft_metadata"

    sender: AccAddress = field(default_factory=AccAddress)
    id: str = ""
    denom: str = ""
    token_uri: str = ""

    def route(self) -> str:
        return super().route()

    def msg_type(self) -> str:
        return super().msg_type()

    def validate_basic(self) -> None:
        """Raise if the message is malformed."""
        if self.sender.empty():
            raise InvalidAddressError("invalid sender address")
        if not self.id.strip():
            raise InvalidNFTError()
        if not self.denom.strip():
            raise InvalidNFTError()

    def sign_bytes(self) -> bytes:
        return super().sign_bytes()

    def signers(self) -> list[AccAddress]:
        return super().signers()


@dataclass(frozen=True)
class MsgMintNFT(_Msg):
    """Mint a new NFT owned by the recipient."""

    AMINO_NAME: ClassVar[str] = "cosmos-sdk/MsgMintNFT"
    TYPE: ClassVar[str] = "mint_nft"

    sender: AccAddress = field(default_factory=AccAddress)
    recipient: AccAddress = field(default_factory=AccAddress)
    id: str = ""
    denom: str = ""
    token_uri: str = ""

    def route(self) -> str:
        return super().route()

    def msg_type(self) -> str:
        return super().msg_type()

    def validate_basic(self) -> None:
        """Raise if the message is malformed."""
        if not self.denom.strip():
            raise InvalidNFTError()
        if not self.id.strip():
            raise InvalidNFTError()
        if self.sender.empty():
            raise InvalidAddressError("invalid sender address")
        if self.recipient.empty():
            raise InvalidAddressError("invalid recipient address")

    def sign_bytes(self) -> bytes:
        return super().sign_bytes()

    def signers(self) -> list[AccAddress]:
        return super().signers()


@dataclass(frozen=True)
class MsgBurnNFT(_Msg):
    """Destroy an existing NFT."""

    AMINO_NAME: ClassVar[str] = "cosmos-sdk/MsgBurnNFT"
    TYPE: ClassVar[str] = "burn_nft"

    sender: AccAddress = field(default_factory=AccAddress)
    id: str = ""
    denom: str = ""

    def route(self) -> str:
        return super().route()

    def msg_type(self) -> str:
        return super().msg_type()

    def validate_basic(self) -> None:
        """Raise if the message is malformed."""
        if not self.id.strip():
            raise InvalidNFTError()
        if not self.denom.strip():
            raise InvalidNFTError()
        if self.sender.empty():
            raise InvalidAddressError("invalid sender address")

    def sign_bytes(self) -> bytes:
        return super().sign_bytes()

    def signers(self) -> list[AccAddress]:
        return super().signers()