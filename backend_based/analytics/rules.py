"""
Static rule tables for the Builder/Degen classifier (Base mainnet).

Configuration data, not logic: addresses are lower-cased, selectors are
0x + 8 hex chars. Loaded once at import and never mutated.
"""

from __future__ import annotations

from types import MappingProxyType

# -----------------------------------------------------------------------------
# Weights and thresholds
# -----------------------------------------------------------------------------

DEPLOY_WEIGHT = 10
TRANSFER_WEIGHT = 1
MINT_WEIGHT = 2
SWAP_WEIGHT = 3
CONTRACT_CALL_WEIGHT = 1

TOKEN_SENT_WEIGHT = 2
TOKEN_RECEIVED_WEIGHT = 1

# Native value at or below this (ETH) is dust and adds no volume
DUST_THRESHOLD_ETH = 0.0001

# (threshold, bonus): applied once per pass when count > threshold; tiers add up
TX_COUNT_BUILDER_BONUSES = ((100, 2), (1000, 5))
TOKEN_TRANSFER_DEGEN_BONUSES = ((50, 2), (100, 5))

CLASSIFICATION_RATIO = 1.5

# -----------------------------------------------------------------------------
# DEX infrastructure (excluded from scoring)
# -----------------------------------------------------------------------------

DEX_ROUTERS = frozenset({
    "0x2626664c2603336e57b271c5c0b26f421741e481",  # Uniswap V3 SwapRouter02
    "0x3fc91a3afd70395cd496c647d5a6cc9d4b2b7fad",  # Uniswap Universal Router
    "0xcf77a3ba9a5ca399b7c97c74d54e5b1beb874e43",  # Aerodrome Router
    "0x6131b5fae19ea4f9d964eac0408e4408b66337b5",  # Aerodrome V2 Router
    "0x1111111254eeb25477b68fb85ed929f73a960582",  # 1inch V5
    "0x111111125421ca6dc452d289314280a0f8842a65",  # 1inch V6
})

DEX_SELECTORS = frozenset({
    "0x38ed1739",  # swapExactTokensForTokens
    "0x8803dbee",  # swapTokensForExactTokens
    "0x7ff36ab5",  # swapExactETHForTokens
    "0x4a25d94a",  # swapTokensForExactETH
    "0x18cbafe5",  # swapExactTokensForETH
    "0xfb3bdb41",  # swapETHForExactTokens
    "0x5ae401dc",  # multicall(uint256,bytes[])
    "0xac9650d8",  # multicall(bytes[])
    "0x04e45aaf",  # exactInputSingle
    "0xb858183f",  # exactInput
    "0x5023b4df",  # exactOutputSingle
    "0x09b81346",  # exactOutput
    "0x3593564c",  # execute(bytes,bytes[],uint256)
    "0x24856bc3",  # execute(bytes,bytes[])
})

# -----------------------------------------------------------------------------
# Known dApps (display only: top dApp)
# -----------------------------------------------------------------------------

KNOWN_DAPPS = MappingProxyType({
    "0xcf205808ed36593aa40a44f10c7f7c2f67d4a4d4": "friend.tech",
    "0x777777c338d93e2c7adf08d102d45ca7cc4ed021": "Zora",
    "0x00000000000000adc04c56bf30ac9d3c0aaf14dc": "OpenSea Seaport",
    "0x0000000000000068f116a894984e2db1123eb395": "OpenSea Seaport",
    "0xa238dd80c259a72e81d7e4664a9801593f98d1c5": "Aave V3",
    "0x03a520b32c04bf3beef7beb72e919cf822ed34f1": "Uniswap V3 Positions",
    "0x4200000000000000000000000000000000000010": "Base Bridge",
    "0x4200000000000000000000000000000000000006": "WETH",
    "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913": "USDC",
    "0x4ccb0bb02fcaba27e82a56646e81d8c5bc4119a5": "Basenames",
})

# -----------------------------------------------------------------------------
# Degen-signal calls (application level, outgoing only)
# -----------------------------------------------------------------------------

DEGEN_SELECTOR_WEIGHTS = MappingProxyType({
    "0xa9059cbb": TRANSFER_WEIGHT,  # transfer
    "0x23b872dd": TRANSFER_WEIGHT,  # transferFrom
    "0x42842e0e": TRANSFER_WEIGHT,  # safeTransferFrom (ERC721)
    "0xb88d4fde": TRANSFER_WEIGHT,  # safeTransferFrom with data (ERC721)
    "0xf242432a": TRANSFER_WEIGHT,  # safeTransferFrom (ERC1155)
    "0x2eb2c2d6": TRANSFER_WEIGHT,  # safeBatchTransferFrom (ERC1155)
    "0x095ea7b3": TRANSFER_WEIGHT,  # approve
    "0xa22cb465": TRANSFER_WEIGHT,  # setApprovalForAll
    "0x40c10f19": MINT_WEIGHT,  # mint(address,uint256)
    "0x6a627842": MINT_WEIGHT,  # mint(address)
    "0xa0712d68": MINT_WEIGHT,  # mint(uint256)
    "0x1249c58b": MINT_WEIGHT,  # mint()
    "0x4e71d92d": MINT_WEIGHT,  # claim()
    "0x379607f5": MINT_WEIGHT,  # claim(uint256)
})

# Matched against the explorer's decoded method name when the selector is unknown
SWAP_METHOD_KEYWORDS = ("swap", "trade", "buy", "sell")
MINT_METHOD_KEYWORDS = ("mint", "claim")

# -----------------------------------------------------------------------------
# Builder heuristics
# -----------------------------------------------------------------------------

FACTORY_CALLDATA_PREFIXES = (
    "0x60806040",  # solidity creation bytecode
    "0xc9c65396",  # createPair
    "0x1688f0b9",  # createProxyWithNonce (Safe)
)

# -----------------------------------------------------------------------------
# Volume conversion
# -----------------------------------------------------------------------------

STABLECOIN_SYMBOLS = frozenset({"USDC", "USDBC", "USDT", "DAI", "USDE", "USDS"})
ETH_SYMBOLS = frozenset({"ETH", "WETH"})

CONTRACT_CALL_TAG = "contract_call"
COIN_TRANSFER_TAG = "coin_transfer"
