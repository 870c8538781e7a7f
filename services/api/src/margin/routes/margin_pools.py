import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from services.api.src.margin.adapters.deepbook import (
    MarginPoolClient,
    ObjectNotFoundError,
    SimulationError,
    SuiRpcError,
    SuiRpcFetcher,
    TransformationError,
    get_default_config,
)
from services.api.src.margin.config import settings
from services.api.src.margin.schemas.responses import (
    MarginBalanceResponse,
    MarginPoolParametersResponse,
    MarginPoolsResponse,
    MarginPoolSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/margin-pools", tags=["margin-pools"])

UPSTREAM_ERRORS = (
    TransformationError,
    SimulationError,
    SuiRpcError,
    ObjectNotFoundError,
    httpx.HTTPError,
)


def get_margin_pool_client() -> MarginPoolClient:
    fetcher = SuiRpcFetcher(settings.sui_rpc_url, timeout=settings.request_timeout)
    return MarginPoolClient(get_default_config(), fetcher, sender=settings.sender_address)


def _require_pool(client: MarginPoolClient, coin: str) -> None:
    if not client.config.get_coin(coin) or not client.config.get_margin_pool(coin):
        raise HTTPException(status_code=404, detail=f"Unknown margin pool: {coin}")


@router.get("", response_model=MarginPoolsResponse)
def list_margin_pools(
    client: MarginPoolClient = Depends(get_margin_pool_client),
) -> MarginPoolsResponse:
    """List the configured margin pools."""
    pools = []
    for pool in client.config.margin_pools:
        coin = client.config.get_coin(pool.coin)
        pools.append(
            MarginPoolSummary(
                coin=pool.coin,
                pool_address=pool.address,
                coin_type=coin.type if coin else pool.type,
                decimals=coin.decimals if coin else 0,
            )
        )
    return MarginPoolsResponse(margin_package_id=client.config.margin_package_id, pools=pools)


@router.get("/{coin}/parameters", response_model=MarginPoolParametersResponse)
def get_pool_parameters(
    coin: str,
    supplier_cap_id: str | None = Query(default=None),
    client: MarginPoolClient = Depends(get_margin_pool_client),
) -> MarginPoolParametersResponse:
    """
    Get the on-chain parameters and interest curve of a margin pool.

    Pass supplier_cap_id to include the supplier's shares and amount.
    """
    _require_pool(client, coin)

    try:
        params = client.get_pool_parameters(coin, supplier_cap_id=supplier_cap_id)
    except UPSTREAM_ERRORS as e:
        logger.error(f"Failed to read {coin} margin pool: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MarginPoolParametersResponse.model_validate(params)


@router.get("/{coin}/balance", response_model=MarginBalanceResponse)
def get_balance(
    coin: str,
    owner: str = Query(...),
    supplier_cap_id: str | None = Query(default=None),
    client: MarginPoolClient = Depends(get_margin_pool_client),
) -> MarginBalanceResponse:
    """
    Get the supplied amount and wallet balance of an owner.

    Without supplier_cap_id the first SupplierCap owned by the owner is used.
    """
    _require_pool(client, coin)

    try:
        if supplier_cap_id is None:
            supplier_cap_id = client.find_supplier_cap(owner)
            if supplier_cap_id is None:
                raise HTTPException(status_code=404, detail=f"No SupplierCap owned by {owner}")
        balance = client.get_balance(coin, supplier_cap_id, owner)
    except UPSTREAM_ERRORS as e:
        logger.error(f"Failed to read {coin} balance for {owner}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MarginBalanceResponse.model_validate(balance)
