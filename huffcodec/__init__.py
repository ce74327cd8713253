"""
huffcodec: A Python library for lossless Huffman compression of text.
"""

from .codecs import (
    CompressionResult,
    SymbolStatistics,
    HuffmanCodec,
    HuffRecord,
    HuffRecordFile,
    compress,
    decompress,
    compression_ratio,
    entropy,
    average_code_length,
)

from .coders import (
    CoderBase,
    BitPacker,
    HuffmanCoder,
    generate_codes,
    encoded_size,
)

from .trees import (
    build_tree,
    serialize_tree,
    deserialize_tree,
)

from .models import (
    Symbol,
    SymbolFrequency,
    FrequencyTable,
    LeafNode,
    InternalNode,
    CodeTable,
)

from .preprocessors import (
    BasePreprocessor,
    CharPreprocessor,
)

from .errors import (
    CodecError,
    EmptyInputError,
    TreeConstructionError,
    CorruptPayloadError,
    InvalidTreeError,
)

from .settings import CodecSettings, DEFAULT_BITS_PER_SYMBOL, HUFF_FILE_EXTENSION

from .logger import (
    Logger,
    Log,
    LogLevel,
    TreeConstructionLog,
    SymbolCodeLog,
    CodingLog,
    PreprocessingProgressStep,
    CodingProgressStep,
    DecodingProgressStep,
)

# Validators
from .validators import *

__all__ = [

    "CompressionResult",
    "SymbolStatistics",
    "HuffmanCodec",
    "HuffRecord",
    "HuffRecordFile",
    "compress",
    "decompress",
    "compression_ratio",
    "entropy",
    "average_code_length",

    "CoderBase",
    "BitPacker",
    "HuffmanCoder",
    "generate_codes",
    "encoded_size",

    "build_tree",
    "serialize_tree",
    "deserialize_tree",

    "Symbol",
    "SymbolFrequency",
    "FrequencyTable",
    "LeafNode",
    "InternalNode",
    "CodeTable",

    "BasePreprocessor",
    "CharPreprocessor",

    "CodecError",
    "EmptyInputError",
    "TreeConstructionError",
    "CorruptPayloadError",
    "InvalidTreeError",

    "CodecSettings",
    "DEFAULT_BITS_PER_SYMBOL",
    "HUFF_FILE_EXTENSION",

    "Logger",
    "Log",
    "LogLevel",
    "TreeConstructionLog",
    "SymbolCodeLog",
    "CodingLog",
    "PreprocessingProgressStep",
    "CodingProgressStep",
    "DecodingProgressStep",
]
