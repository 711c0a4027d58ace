"""eth_feeHistory response model, reward percentiles and fee estimation."""

from .common import DecodeError, FeeEstimatorConfig, FeeHistory, TxGasAndReward
from .rewards import calculate_reward_percentiles, sort_by_reward
from .oracle import Eip1559Estimation, FeeEstimationError, estimate_eip1559_fees

__all__ = [
    "DecodeError",
    "FeeEstimatorConfig",
    "FeeHistory",
    "TxGasAndReward",
    "calculate_reward_percentiles",
    "sort_by_reward",
    "Eip1559Estimation",
    "FeeEstimationError",
    "estimate_eip1559_fees",
]
