"""
Reward percentiles for eth_feeHistory.

Transactions of a block are sorted by effective tip and walked in order,
accumulating gas, until the running total reaches the requested share of the
block's gas. This is the gas-weighted selection go-ethereum and reth use:
https://github.com/ethereum/go-ethereum/blob/ee8e83fa5f6cb261dad2ed0a7bbcde4930c41e6c/eth/gasprice/feehistory.go#L85
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from feehistory.common.types import TxGasAndReward

logger = logging.getLogger(__name__)


def sort_by_reward(transactions: Iterable[TxGasAndReward]) -> list[TxGasAndReward]:
    """Stable ascending sort on reward. Ties keep their input order."""
    return sorted(transactions, key=TxGasAndReward.sort_key)


def calculate_reward_percentiles(
    percentiles: Sequence[float],
    block_gas_used: int,
    transactions: Iterable[TxGasAndReward],
) -> list[int]:
    """Compute one reward per requested percentile for a single block.

    ``percentiles`` must already be validated: ascending and within 0..100.
    A block without transactions yields zero for every percentile.
    """
    if not percentiles:
        return []

    sorted_txs = sort_by_reward(transactions)
    if not sorted_txs:
        logger.debug("No transactions in block, rewards are zero")
        return [0] * len(percentiles)

    rewards = []
    tx_index = 0
    cumulative_gas = sorted_txs[0].gas_used
    for percentile in percentiles:
        threshold = int(block_gas_used * percentile / 100)
        while cumulative_gas < threshold and tx_index < len(sorted_txs) - 1:
            tx_index += 1
            cumulative_gas += sorted_txs[tx_index].gas_used
        rewards.append(sorted_txs[tx_index].reward)
    return rewards
