import logging

from services.api.src.margin.adapters.deepbook.config import CoinConfig, DeepBookMarginConfig
from services.api.src.margin.adapters.deepbook.contract import MarginPoolContract, ParameterBatch
from services.api.src.margin.adapters.deepbook.fetcher import (
    SimulationError,
    SuiRpcError,
    SuiRpcFetcher,
)
from services.api.src.margin.adapters.deepbook.params import ParamKey
from services.api.src.margin.adapters.deepbook.transaction import ReadCallBatch
from services.api.src.margin.adapters.deepbook.transformer import (
    TransformationError,
    decode_return_values,
    format_parameters,
    parse_pool_object,
    to_human,
)
from services.api.src.margin.domain.interest_curve import compute_interest_curve
from services.api.src.margin.domain.models import MarginBalance, MarginPoolParameters

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x" + "0" * 64


class MarginPoolClient:
    def __init__(
        self,
        config: DeepBookMarginConfig,
        fetcher: SuiRpcFetcher,
        sender: str = ZERO_ADDRESS,
    ):
        self.config = config
        self.fetcher = fetcher
        self.sender = sender
        self.contract = MarginPoolContract(config)

    def _get_coin(self, coin: str) -> CoinConfig:
        coin_config = self.config.get_coin(coin)
        if not coin_config or not self.config.get_margin_pool(coin):
            raise ValueError(f"Unknown coin: {coin}")
        return coin_config

    def build_parameter_batch(
        self,
        coin: str,
        supplier_cap_id: str | None = None,
        batch: ReadCallBatch | None = None,
        keys: tuple[ParamKey, ...] | None = None,
    ) -> ParameterBatch:
        """Add parameter reads to a batch without inspecting it."""
        self._get_coin(coin)
        return self.contract.build_parameter_batch(
            coin, supplier_cap_id=supplier_cap_id, batch=batch, keys=keys
        )

    def _inspect(self, params: ParameterBatch) -> dict[ParamKey, str]:
        logger.debug(
            f"Dev-inspecting {len(params.batch)} calls for {params.coin} "
            f"({len(params.keys)} parameters from offset {params.offset})"
        )
        try:
            values = self.fetcher.dev_inspect(self.sender, params.batch.to_bytes())
        except (SimulationError, SuiRpcError) as e:
            logger.error(f"Dev-inspect failed for {params.coin}: {e}")
            raise
        try:
            return decode_return_values(values[params.offset:], params.keys, context=params.coin)
        except TransformationError as e:
            logger.error(f"Malformed dev-inspect results for {params.coin}: {e}")
            raise

    def get_pool_parameters(
        self,
        coin: str,
        supplier_cap_id: str | None = None,
        batch: ReadCallBatch | None = None,
    ) -> MarginPoolParameters:
        """Read all parameters of a margin pool and derive its interest curve.

        Args:
            coin: Coin key of the margin pool (e.g. "SUI")
            supplier_cap_id: SupplierCap object ID; adds the supplier's share
                and amount to the result
            batch: Existing batch to extend with the parameter reads

        Returns:
            MarginPoolParameters in human units
        """
        coin_config = self._get_coin(coin)
        pool = self.config.get_margin_pool(coin)
        logger.info(f"Fetching margin pool parameters for {coin}")

        params = self.build_parameter_batch(coin, supplier_cap_id=supplier_cap_id, batch=batch)
        decoded = self._inspect(params)

        pool_object = self.fetcher.get_object(pool.address)
        try:
            interest, pool_config, state = parse_pool_object(pool_object, context=coin)
        except TransformationError as e:
            logger.error(f"Malformed margin pool object for {coin}: {e}")
            raise

        current_rate = decoded.get(ParamKey.INTEREST_RATE)
        curve = compute_interest_curve(
            interest,
            pool_config,
            state,
            current_borrow_rate=int(current_rate) if current_rate is not None else None,
        )

        return format_parameters(decoded, coin_config, curve)

    def get_balance(self, coin: str, supplier_cap_id: str, owner: str) -> MarginBalance:
        """Supplied amount behind a SupplierCap plus the owner's wallet balance."""
        coin_config = self._get_coin(coin)
        logger.info(f"Fetching {coin} balance for {owner}")

        params = self.build_parameter_batch(
            coin,
            supplier_cap_id=supplier_cap_id,
            keys=(ParamKey.USER_SUPPLY_AMOUNT,),
        )
        decoded = self._inspect(params)
        wallet_raw = self.fetcher.get_balance(owner, coin_config.type)

        return MarginBalance(
            coin=coin,
            user_supply_amount=to_human(decoded.get(ParamKey.USER_SUPPLY_AMOUNT, 0), coin_config.scalar),
            wallet_balance=to_human(wallet_raw, coin_config.scalar),
        )

    def find_supplier_cap(self, owner: str) -> str | None:
        """First SupplierCap owned by an address, if any."""
        cap_ids = self.fetcher.get_owned_object_ids(owner, self.config.supplier_cap_type)
        if not cap_ids:
            logger.info(f"No SupplierCap found for {owner}")
            return None
        return cap_ids[0]
