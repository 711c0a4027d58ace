"""Pytest configuration and shared fixtures for all tests."""

import pytest

from feehistory.common.types import FeeHistory, TxGasAndReward


# =============================================================================
# Wire payloads
# =============================================================================

# Single block, pre-Cancun blob fees (zero sentinels)
SAMPLE_FEE_HISTORY_JSON = (
    '{"baseFeePerGas":["0x342770c0","0x2da282a8"],"gasUsedRatio":[0.0],'
    '"baseFeePerBlobGas":["0x0","0x0"],"blobGasUsedRatio":[0.0],"oldestBlock":"0x1"}'
)

# Ten post-Cancun blocks with one reward percentile requested
RECENT_FEE_HISTORY_JSON = (
    '{"baseFeePerBlobGas":["0xc0","0xb2","0xab","0x98","0x9e","0x92","0xa4","0xb9","0xd0","0xea","0xfd"],'
    '"baseFeePerGas":["0x4cb8cf181","0x53075988e","0x4fb92ee18","0x45c209055","0x4e790dca2",'
    '"0x58462e84e","0x5b7659f4e","0x5d66ea3aa","0x6283c6e45","0x5ecf0e1e5","0x5da59cf89"],'
    '"blobGasUsedRatio":[0.16666666666666666,0.3333333333333333,0,0.6666666666666666,'
    '0.16666666666666666,1,1,1,1,0.8333333333333334],'
    '"gasUsedRatio":[0.8288135,0.3407616666666667,0,0.9997232,0.999601,0.6444664333333333,'
    '0.5848306333333333,0.7189564,0.34952733333333336,0.4509799666666667],'
    '"oldestBlock":"0x59f94f",'
    '"reward":[["0x59682f00"],["0x59682f00"],["0x0"],["0x59682f00"],["0x59682f00"],'
    '["0x3b9aca00"],["0x59682f00"],["0x59682f00"],["0x3b9aca00"],["0x59682f00"]]}'
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_json():
    return SAMPLE_FEE_HISTORY_JSON


@pytest.fixture
def recent_json():
    return RECENT_FEE_HISTORY_JSON


@pytest.fixture
def sample_history():
    """Decoded form of SAMPLE_FEE_HISTORY_JSON."""
    return FeeHistory(
        base_fee_per_gas=[875_000_000, 765_625_000],
        gas_used_ratio=[0.0],
        base_fee_per_blob_gas=[0, 0],
        blob_gas_used_ratio=[0.0],
        oldest_block=1,
        reward=None,
    )


@pytest.fixture
def cancun_history():
    """Three post-Cancun blocks with 25/50/75 percentile rewards."""
    return FeeHistory(
        base_fee_per_gas=[10_000_000_000, 11_000_000_000, 12_000_000_000, 12_500_000_000],
        gas_used_ratio=[0.9, 0.8, 0.6],
        base_fee_per_blob_gas=[1, 2, 3, 4],
        blob_gas_used_ratio=[0.5, 0.5, 0.66],
        oldest_block=100,
        reward=[
            [1_000_000_000, 2_000_000_000, 3_000_000_000],
            [0, 0, 0],
            [1_500_000_000, 2_500_000_000, 4_000_000_000],
        ],
    )


@pytest.fixture
def block_txs():
    """Four transactions of a 100_000 gas block, unsorted by tip."""
    return [
        TxGasAndReward(gas_used=40_000, reward=30),
        TxGasAndReward(gas_used=21_000, reward=10),
        TxGasAndReward(gas_used=21_000, reward=20),
        TxGasAndReward(gas_used=18_000, reward=50),
    ]
