from xxBloomFilter.bloom import (
    DEFAULT_FP_RATE,
    Bloom,
    compute_bit_count,
    compute_bitmap_size,
    item_bytes,
    optimal_k_num,
)
from xxBloomFilter.exceptions import (
    BloomError,
    IncompatibleFilterError,
    InvalidRateError,
    InvalidSizeError,
    InvalidStateError,
)
from xxBloomFilter.state import BloomState, clone, export_state, import_state

__version__ = "0.1.0"
