"""
EIP-1559 fee suggestions derived from an eth_feeHistory result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from feehistory.common.config import FeeEstimatorConfig
from feehistory.common.types import FeeHistory

logger = logging.getLogger(__name__)


class FeeEstimationError(Exception):
    pass


@dataclass
class Eip1559Estimation:
    max_fee_per_gas: int
    max_priority_fee_per_gas: int
    # None while the chain is pre-Cancun
    max_fee_per_blob_gas: Optional[int] = None


def estimate_priority_fee(rewards: Optional[Sequence[Sequence[int]]],
                          config: Optional[FeeEstimatorConfig] = None) -> int:
    """Median of the non-zero first-percentile rewards, clamped to the config bounds."""
    if config is None:
        config = FeeEstimatorConfig()

    # blocks without transactions report zero tips
    tips = sorted(row[0] for row in rewards or () if row and row[0] > 0)
    if not tips:
        return config.min_priority_fee

    n = len(tips)
    if n % 2 == 0:
        median = (tips[n // 2 - 1] + tips[n // 2]) // 2
    else:
        median = tips[n // 2]

    fee = max(median, config.min_priority_fee)
    if config.max_priority_fee is not None:
        fee = min(fee, config.max_priority_fee)
    return fee


def estimate_eip1559_fees(history: FeeHistory,
                          config: Optional[FeeEstimatorConfig] = None) -> Eip1559Estimation:
    if config is None:
        config = FeeEstimatorConfig()

    base_fee = history.latest_block_base_fee()
    if base_fee is None:
        base_fee = history.next_block_base_fee()
    if base_fee is None:
        raise FeeEstimationError("fee history contains no base fee")

    priority_fee = estimate_priority_fee(history.reward, config)

    blob_fee = history.next_block_blob_base_fee()
    max_fee_per_blob_gas = None
    if blob_fee is not None:
        max_fee_per_blob_gas = blob_fee * config.blob_base_fee_multiplier

    estimation = Eip1559Estimation(
        max_fee_per_gas=base_fee * config.base_fee_multiplier + priority_fee,
        max_priority_fee_per_gas=priority_fee,
        max_fee_per_blob_gas=max_fee_per_blob_gas,
    )
    logger.debug(
        "Fee estimate from blocks from %d: base=%d tip=%d max=%d",
        history.oldest_block, base_fee, priority_fee, estimation.max_fee_per_gas,
    )
    return estimation
