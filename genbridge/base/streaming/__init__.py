"""Streaming package.

Frame decoding, delta extraction, accumulation and the adapter loop tying
them together, exposed under a single namespace.
"""

from .streaming import DATA_PREFIX, SENTINEL, DeltaResult, StreamChunk, StreamEvent
from .frame_decoder import SSEFrameDecoder, iter_stream_events, parse_line
from .delta_extractor import DeltaTranslator, extract_delta, join_part_texts
from .accumulator import ResponseAccumulator
from .streaming_metrics import StreamMetrics
from .streaming_adapter import StreamingAdapter, StreamStarter

__all__ = [
    "DATA_PREFIX",
    "SENTINEL",
    "StreamEvent",
    "DeltaResult",
    "StreamChunk",
    "SSEFrameDecoder",
    "iter_stream_events",
    "parse_line",
    "DeltaTranslator",
    "extract_delta",
    "join_part_texts",
    "ResponseAccumulator",
    "StreamMetrics",
    "StreamingAdapter",
    "StreamStarter",
]
