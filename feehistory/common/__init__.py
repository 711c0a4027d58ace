"""Fee history types, quantity codec and settings."""

from .hexcodec import U64, U128, DecodeError
from .types import FeeHistory, TxGasAndReward
from .config import FeeEstimatorConfig

__all__ = [
    "U64",
    "U128",
    "DecodeError",
    "FeeHistory",
    "TxGasAndReward",
    "FeeEstimatorConfig",
]
