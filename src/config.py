import os
from pathlib import Path

from dotenv import load_dotenv

_ENV_LOADED = False


def _load_env() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    env_path = Path(__file__).resolve().parents[1] / ".env"
    load_dotenv(dotenv_path=env_path)
    _ENV_LOADED = True


def get_env(
    name: str, default: str | None = None, required: bool = False
) -> str | None:
    _load_env()
    value = os.environ.get(name, default)
    if required and (value is None or value == ""):
        raise SystemExit(f"{name} env var is required")
    return value


# Pharos Atlantic Testnet
CHAIN_ID = 688689

NATIVE_ADDRESS = "0x0000000000000000000000000000000000000000"
WRAPPED_NATIVE_ADDRESS = get_env(
    "OCTOPUS_WRAPPED_NATIVE", "0x2C0D2ff171D0BdA5706e220C14DC116186AB156A"
)

TOKEN_LIST: list[dict] = [
    {
        "address": NATIVE_ADDRESS,
        "symbol": "PHRS",
        "name": "Pharos",
        "decimals": 18,
        "is_native": True,
    },
    {
        "address": "0xf45135aab4285e4a4061d2ef16b96a0a8560cbd6",
        "symbol": "OCTO",
        "name": "Octopus Token",
        "decimals": 18,
    },
    {
        "address": "0x7065C3dd0a430E542330702C8541FD9bAFd25dC8",
        "symbol": "BNB",
        "name": "Binance Coin",
        "decimals": 18,
    },
    {
        "address": "0xba7658877cC1AA6738c2932B0aB1aa01c9904cd8",
        "symbol": "ETH",
        "name": "Ethereum",
        "decimals": 18,
    },
    {
        "address": "0x20C9a9EE7d7634F73558d65686e55495D9BA9F4f",
        "symbol": "USDC",
        "name": "USD Coin",
        "decimals": 6,
    },
    {
        "address": WRAPPED_NATIVE_ADDRESS,
        "symbol": "WPHRS",
        "name": "Wrapped Pharos",
        "decimals": 18,
    },
]

# Tried in order when the wrapped-native token cannot bridge a pair.
BRIDGE_FALLBACK_SYMBOLS = ("OCTO", "USDC", "BNB", "ETH")
USD_REFERENCE_SYMBOL = "USDC"

SLIPPAGE_PERCENT = get_env("OCTOPUS_SLIPPAGE_PERCENT", "0.5")
LIQUIDITY_SLIPPAGE_PERCENT = get_env("OCTOPUS_LIQUIDITY_SLIPPAGE_PERCENT", "0.5")
DEADLINE_MINUTES = 20
