"""Exceptions raised by the NFT ledger."""

from __future__ import annotations


class NFTError(Exception):
    """Base class for every error the NFT ledger raises.

    The optional message gives context; the string form is
    ``"<message>: <description>"``, or only the description when no
    message was given.
    """

    codespace = "nft"
    code = 0
    description = "NFT error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        text = f"{message}: {self.description}" if message else self.description
        super().__init__(text)


class InvalidCollectionError(NFTError):
    """The NFT collection is invalid."""

    code = 1
    description = "invalid NFT collection"


class UnknownCollectionError(NFTError):
    """The NFT collection does not exist."""

    code = 2
    description = "unknown NFT collection"


class InvalidNFTError(NFTError):
    """The NFT is invalid."""

    code = 3
    description = "invalid NFT"


class UnknownNFTError(NFTError):
    """The NFT does not exist."""

    code = 4
    description = "unknown NFT"


class NFTAlreadyExistsError(NFTError):
    """An NFT with the same ID already exists."""

    code = 5
    description = "NFT already exists"


class EmptyMetadataError(NFTError):
    """The NFT metadata is empty."""

    code = 6
    description = "NFT metadata can't be empty"


class InvalidAddressError(NFTError):
    """An account address is missing or malformed."""

    codespace = "sdk"
    code = 7
    description = "invalid address"


class UnknownRequestError(NFTError):
    """A query or request could not be understood."""

    codespace = "sdk"
    code = 6
    description = "unknown request"


class JSONMarshalError(NFTError):
    """A value could not be encoded as JSON."""

    codespace = "sdk"
    code = 16
    description = "failed to marshal JSON bytes"