"""
Fee estimation settings.

Defaults follow the common EIP-1559 wallet heuristic: pay twice the current
base fee plus the median tip of recent blocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


EIP1559_BASE_FEE_MULTIPLIER = 2
EIP1559_MIN_PRIORITY_FEE = 1  # wei
DEFAULT_REWARD_PERCENTILE = 50.0


@dataclass
class FeeEstimatorConfig:
    base_fee_multiplier: int = EIP1559_BASE_FEE_MULTIPLIER
    blob_base_fee_multiplier: int = EIP1559_BASE_FEE_MULTIPLIER

    # Bounds for the suggested tip; no upper bound when max_priority_fee is None
    min_priority_fee: int = EIP1559_MIN_PRIORITY_FEE
    max_priority_fee: Optional[int] = None

    # Percentile callers should request from eth_feeHistory; the estimator
    # reads the first reward column only.
    reward_percentile: float = DEFAULT_REWARD_PERCENTILE

    def __post_init__(self) -> None:
        if self.base_fee_multiplier < 1 or self.blob_base_fee_multiplier < 1:
            raise ValueError("fee multipliers must be at least 1")
        if self.min_priority_fee < 0:
            raise ValueError("min_priority_fee must be non-negative")
        if self.max_priority_fee is not None and self.max_priority_fee < self.min_priority_fee:
            raise ValueError(
                f"max_priority_fee ({self.max_priority_fee}) is below "
                f"min_priority_fee ({self.min_priority_fee})"
            )
        if not 0.0 <= self.reward_percentile <= 100.0:
            raise ValueError(f"reward_percentile out of range: {self.reward_percentile}")

    def fee_history_params(self, block_count: int = 10,
                           newest_block: str = "latest") -> list:
        """Positional params for an eth_feeHistory request feeding the estimator."""
        return [hex(block_count), newest_block, [self.reward_percentile]]
