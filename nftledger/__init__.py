"""A key-value backed ledger of non-fungible token collections, their owners and messages."""

__version__ = "0.1.0"