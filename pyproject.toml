[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nftledger"
version = "0.1.0"
description = "A key-value backed ledger of non-fungible token collections, owners and messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["nft", "ledger", "non-fungible", "token", "keeper", "genesis", "bech32"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nftledger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
