"""
Fee history types: FeeHistory, TxGasAndReward.

FeeHistory is the result object of eth_feeHistory. It converts to and from
the JSON-RPC wire shape via to_rpc() / from_rpc() and to_json() / from_json().
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from feehistory.common.hexcodec import (
    U64,
    U128,
    DecodeError,
    encode_quantity,
    encode_quantity_list,
    encode_quantity_matrix,
    decode_quantity,
    decode_quantity_list,
    decode_optional_quantity_matrix,
    decode_ratio_list,
    encode_ratio_list,
)

logger = logging.getLogger(__name__)

_RATIO_FIELDS = ("gasUsedRatio", "blobGasUsedRatio")


# ---------------------------------------------------------------------------
# Reward ordering
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TxGasAndReward:
    """Gas used and effective tip of one transaction in a block.

    Ordering looks at ``reward`` only, the same as go-ethereum's fee history
    sorter. ``gas_used`` rides along for the gas-weighted percentile walk.
    Equality is still structural, so two values with the same reward and
    different gas are unequal yet neither sorts before the other.
    """
    gas_used: int = 0   # u64
    reward: int = 0     # u128, effective priority fee per gas

    @staticmethod
    def sort_key(item: TxGasAndReward) -> int:
        return item.reward

    @staticmethod
    def compare(a: TxGasAndReward, b: TxGasAndReward) -> int:
        """Three-way comparison on reward: -1, 0 or 1."""
        ka, kb = TxGasAndReward.sort_key(a), TxGasAndReward.sort_key(b)
        return (ka > kb) - (ka < kb)

    def __lt__(self, other: TxGasAndReward) -> bool:
        if not isinstance(other, TxGasAndReward):
            return NotImplemented
        return self.compare(self, other) < 0

    def __le__(self, other: TxGasAndReward) -> bool:
        if not isinstance(other, TxGasAndReward):
            return NotImplemented
        return self.compare(self, other) <= 0

    def __gt__(self, other: TxGasAndReward) -> bool:
        if not isinstance(other, TxGasAndReward):
            return NotImplemented
        return self.compare(self, other) > 0

    def __ge__(self, other: TxGasAndReward) -> bool:
        if not isinstance(other, TxGasAndReward):
            return NotImplemented
        return self.compare(self, other) >= 0


# ---------------------------------------------------------------------------
# eth_feeHistory result
# ---------------------------------------------------------------------------

@dataclass
class FeeHistory:
    """Response of ``eth_feeHistory``.

    ``base_fee_per_gas`` and ``base_fee_per_blob_gas`` carry one extra
    trailing entry: the fee of the block after the newest one in the range,
    which is derivable from that newest block. Zeroes stand in for blocks
    before London (EIP-1559) and Cancun (EIP-4844) respectively.
    """
    base_fee_per_gas: list[int] = field(default_factory=list)
    gas_used_ratio: list[float] = field(default_factory=list)
    base_fee_per_blob_gas: list[int] = field(default_factory=list)
    blob_gas_used_ratio: list[float] = field(default_factory=list)
    oldest_block: int = 0
    # None when no reward percentiles were requested
    reward: Optional[list[list[int]]] = None

    # -- accessors --

    def latest_block_base_fee(self) -> Optional[int]:
        """Base fee of the newest block in the requested range."""
        # last entry belongs to the next block
        if len(self.base_fee_per_gas) < 2:
            return None
        return self.base_fee_per_gas[-2]

    def next_block_base_fee(self) -> Optional[int]:
        """Base fee of the block following the requested range."""
        if not self.base_fee_per_gas:
            return None
        return self.base_fee_per_gas[-1]

    def next_block_blob_base_fee(self) -> Optional[int]:
        """Blob base fee of the next block, None if that block is pre-Cancun."""
        if not self.base_fee_per_blob_gas:
            return None
        return _nonzero(self.base_fee_per_blob_gas[-1])

    def latest_block_blob_base_fee(self) -> Optional[int]:
        """Blob base fee of the newest requested block, None if pre-Cancun."""
        if len(self.base_fee_per_blob_gas) < 2:
            return None
        return _nonzero(self.base_fee_per_blob_gas[-2])

    def newest_block(self) -> Optional[int]:
        if not self.gas_used_ratio:
            return None
        return self.oldest_block + len(self.gas_used_ratio) - 1

    def validate(self) -> None:
        """Check array length relations and quantity widths."""
        blocks = len(self.gas_used_ratio)
        if self.base_fee_per_gas and blocks and len(self.base_fee_per_gas) != blocks + 1:
            raise ValueError(
                f"baseFeePerGas has {len(self.base_fee_per_gas)} entries, "
                f"expected {blocks + 1}"
            )
        blob_blocks = len(self.blob_gas_used_ratio)
        if (self.base_fee_per_blob_gas and blob_blocks
                and len(self.base_fee_per_blob_gas) != blob_blocks + 1):
            raise ValueError(
                f"baseFeePerBlobGas has {len(self.base_fee_per_blob_gas)} entries, "
                f"expected {blob_blocks + 1}"
            )
        if self.reward is not None:
            if len(self.reward) != blocks:
                raise ValueError(f"reward has {len(self.reward)} rows, expected {blocks}")
            widths = {len(row) for row in self.reward}
            if len(widths) > 1:
                raise ValueError(f"reward rows have differing lengths: {sorted(widths)}")
        # encoding performs the type and width checks
        encode_quantity_list(self.base_fee_per_gas, U128)
        encode_quantity_list(self.base_fee_per_blob_gas, U128)
        encode_quantity(self.oldest_block, U64)
        if self.reward is not None:
            encode_quantity_matrix(self.reward, U128)

    # -- wire format --

    def to_rpc(self) -> dict:
        """Format for a JSON-RPC response.

        Empty fee arrays and an empty blobGasUsedRatio are left out, matching
        Geth and Erigon. gasUsedRatio is always present.
        """
        result: dict[str, Any] = {}
        if self.base_fee_per_gas:
            result["baseFeePerGas"] = encode_quantity_list(self.base_fee_per_gas, U128)
        result["gasUsedRatio"] = [float(r) for r in self.gas_used_ratio]
        if self.base_fee_per_blob_gas:
            result["baseFeePerBlobGas"] = encode_quantity_list(self.base_fee_per_blob_gas, U128)
        if self.blob_gas_used_ratio:
            result["blobGasUsedRatio"] = [float(r) for r in self.blob_gas_used_ratio]
        result["oldestBlock"] = encode_quantity(self.oldest_block, U64)
        if self.reward is not None:
            result["reward"] = encode_quantity_matrix(self.reward, U128)
        return result

    @classmethod
    def from_rpc(cls, data: Any) -> FeeHistory:
        if not isinstance(data, dict):
            raise DecodeError(f"expected object, got {type(data).__name__}")
        if "gasUsedRatio" not in data:
            raise DecodeError("missing field", "gasUsedRatio")
        try:
            return cls(
                base_fee_per_gas=decode_quantity_list(
                    data.get("baseFeePerGas", []), U128, "baseFeePerGas"),
                gas_used_ratio=decode_ratio_list(data["gasUsedRatio"], "gasUsedRatio"),
                base_fee_per_blob_gas=decode_quantity_list(
                    data.get("baseFeePerBlobGas", []), U128, "baseFeePerBlobGas"),
                blob_gas_used_ratio=decode_ratio_list(
                    data.get("blobGasUsedRatio", []), "blobGasUsedRatio"),
                oldest_block=decode_quantity(data.get("oldestBlock", 0), U64, "oldestBlock"),
                reward=decode_optional_quantity_matrix(data.get("reward"), U128, "reward"),
            )
        except DecodeError as e:
            logger.debug("Rejected fee history payload: %s", e)
            raise

    def to_json(self) -> str:
        """Compact JSON text, byte-compatible with the reference clients.

        Ratios are written with format_ratio so small values come out as
        "0.00007" rather than Python's "7e-05".
        """
        parts = []
        for key, value in self.to_rpc().items():
            if key in _RATIO_FIELDS:
                encoded = encode_ratio_list(value)
            else:
                encoded = json.dumps(value, separators=(",", ":"))
            parts.append(f"{json.dumps(key)}:{encoded}")
        return "{" + ",".join(parts) + "}"

    @classmethod
    def from_json(cls, text: str | bytes) -> FeeHistory:
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            raise DecodeError(f"invalid JSON: {e}") from e
        return cls.from_rpc(data)


def _reject_constant(token: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise DecodeError(f"non-standard number {token}")


def _nonzero(fee: int) -> Optional[int]:
    # zero marks a pre-EIP-4844 block, not an actual fee
    return fee if fee != 0 else None
