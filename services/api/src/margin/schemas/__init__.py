from services.api.src.margin.schemas.responses import (
    MarginBalanceResponse,
    MarginPoolParametersResponse,
    MarginPoolsResponse,
    MarginPoolSummary,
)

__all__ = [
    "MarginBalanceResponse",
    "MarginPoolParametersResponse",
    "MarginPoolsResponse",
    "MarginPoolSummary",
]
