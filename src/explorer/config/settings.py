import os
from dotenv import load_dotenv
load_dotenv()
# ---- Alchemy ----
ALCHEMY_API_KEY = os.environ.get("ALCHEMY_API_KEY")
ALCHEMY_URL_TEMPLATES = {
    "ETH": "https://eth-mainnet.g.alchemy.com/v2/{}",
    "POLYGON": "https://polygon-mainnet.g.alchemy.com/v2/{}",
}

ALCHEMY_REQUESTS_PER_SEC = float(os.environ.get("ALCHEMY_REQUESTS_PER_SEC", "10"))
ALCHEMY_TIMEOUT_SEC = 15
ALCHEMY_MAX_RETRIES = int(os.environ.get("ALCHEMY_MAX_RETRIES", "3"))


def _rpc_url(network: str, env_name: str):
    url = os.environ.get(env_name)
    if url:
        return url
    if ALCHEMY_API_KEY:
        return ALCHEMY_URL_TEMPLATES[network].format(ALCHEMY_API_KEY)
    return None


# ---- Networks ----
NETWORKS = {
    "ETH": {
        "name": "Ethereum",
        "symbol": "ETH",
        "chain_id": 1,
        "rpc_url": _rpc_url("ETH", "ETH_RPC_URL"),
    },
    "POLYGON": {
        "name": "Polygon",
        "symbol": "POL",
        "chain_id": 137,
        "rpc_url": _rpc_url("POLYGON", "POLYGON_RPC_URL"),
    },
}
DEFAULT_NETWORK = os.environ.get("EXPLORER_NETWORK", "ETH")

# ---- Activity feed ----
FEED_PAGE_SIZE = int(os.environ.get("FEED_PAGE_SIZE", "20"))     # 0x14 per side
FEED_CATEGORIES = ("external", "internal", "erc20", "erc721", "erc1155")
FEED_MAX_WORKERS = 4

# Native transfers come back without a decimal hint
DEFAULT_DECIMALS = 18
