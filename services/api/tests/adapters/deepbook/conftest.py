import pytest


def make_pool_object(
    base_rate="50000000",
    base_slope="100000000",
    excess_slope="2000000000",
    optimal_utilization="800000000",
    max_utilization_rate="900000000",
    min_borrow="100000000",
    protocol_spread="100000000",
    supply_cap="1000000000000000",
    total_supply="1000000000000",
    total_borrow="500000000000",
) -> dict:
    """MarginPool object as returned by sui_getObject with showContent."""
    return {
        "objectId": "0x53041c6f86c4782aabbfc1d4fe234a6d37160310c7ee740c915f0a01b7127344",
        "version": "700000000",
        "content": {
            "dataType": "moveObject",
            "type": "0x97d9::margin_pool::MarginPool<0x2::sui::SUI>",
            "fields": {
                "id": {"id": "0x53041c6f86c4782aabbfc1d4fe234a6d37160310c7ee740c915f0a01b7127344"},
                "config": {
                    "type": "0x97d9::protocol_config::ProtocolConfig",
                    "fields": {
                        "interest_config": {
                            "type": "0x97d9::protocol_config::InterestConfig",
                            "fields": {
                                "base_rate": base_rate,
                                "base_slope": base_slope,
                                "excess_slope": excess_slope,
                                "optimal_utilization": optimal_utilization,
                            },
                        },
                        "margin_pool_config": {
                            "type": "0x97d9::protocol_config::MarginPoolConfig",
                            "fields": {
                                "max_utilization_rate": max_utilization_rate,
                                "min_borrow": min_borrow,
                                "protocol_spread": protocol_spread,
                                "supply_cap": supply_cap,
                            },
                        },
                    },
                },
                "state": {
                    "type": "0x97d9::margin_state::State",
                    "fields": {
                        "total_supply": total_supply,
                        "total_borrow": total_borrow,
                        "supply_shares": "990000000000",
                        "borrow_shares": "480000000000",
                    },
                },
            },
        },
    }


@pytest.fixture
def pool_object():
    return make_pool_object()


@pytest.fixture
def pool_object_factory():
    return make_pool_object
