from services.api.src.margin.adapters.deepbook.client import MarginPoolClient
from services.api.src.margin.adapters.deepbook.config import (
    DeepBookMarginConfig,
    get_default_config,
)
from services.api.src.margin.adapters.deepbook.contract import MissingSupplierCapError
from services.api.src.margin.adapters.deepbook.fetcher import (
    ObjectNotFoundError,
    SimulationError,
    SuiRpcError,
    SuiRpcFetcher,
)
from services.api.src.margin.adapters.deepbook.transformer import TransformationError

__all__ = [
    "DeepBookMarginConfig",
    "MarginPoolClient",
    "MissingSupplierCapError",
    "ObjectNotFoundError",
    "SimulationError",
    "SuiRpcError",
    "SuiRpcFetcher",
    "TransformationError",
    "get_default_config",
]
