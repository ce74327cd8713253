import base64
import binascii
import json
import zlib
import numpy as np
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .validators import validate_type, validate_non_negative_int, validate_file_exists
from .preprocessors import BasePreprocessor, CharPreprocessor
from .coders import BitPacker, HuffmanCoder, generate_codes
from .trees import build_tree, deserialize_tree, serialize_tree
from .models import SymbolFrequency
from .settings import CodecSettings, TEXT_ENCODING
from .errors import CodecError, CorruptPayloadError, EmptyInputError
from .logger import Logger, CodingLog


class CompressionResult:
    """Represents the outcome of one compress call."""

    def __init__(
        self,
        payload: str,
        tree: Dict[str, Any],
        original_size: int,
        compressed_size: int,
        compression_ratio: float,
    ) -> None:
        self.payload = payload
        self.tree = tree
        self.original_size = original_size
        self.compressed_size = compressed_size
        self.compression_ratio = compression_ratio

    def to_dict(self) -> Dict[str, Any]:
        """Camel-case form shared with the .huff record and web front ends."""
        return {
            "compressed": self.payload,
            "tree": self.tree,
            "originalSize": self.original_size,
            "compressedSize": self.compressed_size,
            "compressionRatio": self.compression_ratio,
        }

    def __repr__(self) -> str:
        return (
            f"CompressionResult(original_size={self.original_size}, "
            f"compressed_size={self.compressed_size}, "
            f"compression_ratio={self.compression_ratio:.2f})"
        )


class SymbolStatistics:
    """One row of the per-symbol code report."""

    def __init__(self, entry: SymbolFrequency, probability: float, code: str) -> None:
        self.symbol = entry.symbol
        self.count = entry.frequency
        self.probability = probability
        self.code = code

    @property
    def code_length(self) -> int:
        return len(self.code)

    def __repr__(self) -> str:
        return f"[{self.symbol!r}, {self.count}, {self.probability:.4f}, {self.code}]"


_BUNDLE_SEPARATORS = (",", ":")


def _bundle_checksum(bundle: Dict[str, Any]) -> int:
    """CRC-32 over every bundle field except the checksum itself."""
    fields = {key: value for key, value in bundle.items() if key != "checksum"}
    return zlib.crc32(json.dumps(fields, sort_keys=True, separators=_BUNDLE_SEPARATORS).encode(TEXT_ENCODING))


def compression_ratio(original_size: int, compressed_size: int) -> float:
    """Percentage saved; negative when the output is larger than the input."""
    if original_size == 0:
        return 0.0
    return (original_size - compressed_size) / original_size * 100


def entropy(statistics: List[SymbolStatistics]) -> float:
    """Shannon entropy in bits per symbol."""
    probs = np.array([row.probability for row in statistics], dtype=np.float64)
    return float(-np.sum(probs * np.log2(probs)))


def average_code_length(statistics: List[SymbolStatistics]) -> float:
    """Expected code length in bits per symbol."""
    return float(sum(row.probability * row.code_length for row in statistics))


class HuffmanCodec:
    """
    Compresses text into a base64 payload plus a serialized Huffman tree, and back.
    """

    def __init__(
        self,
        settings: Optional[CodecSettings] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        if settings is None:
            settings = CodecSettings()
        validate_type(settings, "Settings", CodecSettings)
        self.settings = settings
        self.logger = logger

    def _preprocessor(self) -> BasePreprocessor:
        return CharPreprocessor(self.settings.bits_per_symbol, self.logger)

    def compress(self, text: str) -> CompressionResult:
        """
        Compress the input text.

        Args:
            text (str): The text to compress.

        Returns:
            CompressionResult: The payload, the serialized tree and the size metrics.

        Raises:
            EmptyInputError: If the text is empty.
        """
        validate_type(text, "Text", str)
        if len(text) == 0:
            self._log_error(EmptyInputError())
            raise EmptyInputError()

        preprocessor = self._preprocessor()
        symbols, table = preprocessor.convert_to_symbols(text)
        coder = HuffmanCoder(self.logger)
        root, bits = coder.encode(symbols, table)

        original_size = preprocessor.original_size(len(symbols))
        compressed_size = len(bits)
        ratio = compression_ratio(original_size, compressed_size)

        packed, bits_length = BitPacker.pack(bits)
        bundle = {
            "compressed": packed,
            "bitsLength": bits_length,
            "originalSize": original_size,
            "compressedSize": compressed_size,
            "compressionRatio": ratio,
        }
        bundle["checksum"] = _bundle_checksum(bundle)
        payload = base64.b64encode(json.dumps(bundle, separators=_BUNDLE_SEPARATORS).encode(TEXT_ENCODING)).decode("ascii")

        if self.logger is not None:
            self.logger.log(CodingLog(original_size, compressed_size))

        return CompressionResult(payload, serialize_tree(root), original_size, compressed_size, ratio)

    def decompress(self, payload: str, tree: Optional[Dict[str, Any]]) -> str:
        """
        Decompress a payload produced by compress().

        Args:
            payload (str): The opaque payload string.
            tree (dict): The serialized tree returned alongside the payload.

        Returns:
            str: The original text.

        Raises:
            CorruptPayloadError: If the payload cannot be parsed or decoded.
            InvalidTreeError: If the tree is missing or malformed.
        """
        try:
            bundle = self._read_bundle(payload)
            root = deserialize_tree(tree)
            bits = BitPacker.unpack(bundle["compressed"], bundle["bitsLength"])
            symbols = HuffmanCoder(self.logger).decode(bits, root)
        except CodecError as e:
            self._log_error(e)
            raise
        return self._preprocessor().convert_from_symbols(symbols)

    def symbol_statistics(self, text: str) -> List[SymbolStatistics]:
        """
        Per-symbol report of counts, probabilities and codes, most frequent first.

        Args:
            text (str): The text to analyse.

        Returns:
            List[SymbolStatistics]: One row per distinct symbol.
        """
        validate_type(text, "Text", str)
        if len(text) == 0:
            raise EmptyInputError()
        _, table = self._preprocessor().convert_to_symbols(text)
        codes = generate_codes(build_tree(table))
        total = table.get_total()
        rows = [SymbolStatistics(entry, entry.frequency / total, codes.get_code(entry.symbol)) for entry in table.items()]
        rows.sort(key=lambda row: -row.count)
        return rows

    @staticmethod
    def _read_bundle(payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, str):
            raise CorruptPayloadError("Payload must be a string")
        try:
            raw = base64.b64decode(payload.encode("ascii"), validate=True)
            text = raw.decode(TEXT_ENCODING)
            bundle = json.loads(text)
        except (binascii.Error, UnicodeError, ValueError) as e:
            raise CorruptPayloadError("Payload is corrupted or invalid") from e

        if not isinstance(bundle, dict):
            raise CorruptPayloadError("Payload must hold a JSON object")
        # compress() output is the only accepted encoding, byte for byte
        if base64.b64encode(raw).decode("ascii") != payload or json.dumps(bundle, separators=_BUNDLE_SEPARATORS) != text:
            raise CorruptPayloadError("Payload is corrupted or invalid")
        checksum = bundle.get("checksum")
        if isinstance(checksum, bool) or not isinstance(checksum, int) or checksum != _bundle_checksum(bundle):
            raise CorruptPayloadError("Payload checksum does not match its contents")
        if not isinstance(bundle.get("compressed"), str):
            raise CorruptPayloadError("Payload is missing the packed bits")
        bits_length = bundle.get("bitsLength")
        if isinstance(bits_length, bool) or not isinstance(bits_length, int) or bits_length < 0:
            raise CorruptPayloadError("Payload is missing a valid bit length")
        return bundle

    def _log_error(self, error: Exception) -> None:
        if self.logger is not None:
            self.logger.error(type(error).__name__, str(error))


class HuffRecord:
    """Represents a saved .huff file."""

    def __init__(
        self,
        tree: Dict[str, Any],
        payload: str,
        original_size: int,
        compressed_size: int,
        timestamp: str,
    ) -> None:
        validate_type(tree, "Tree", dict)
        validate_type(payload, "Payload", str)
        validate_non_negative_int(original_size, "Original size")
        validate_non_negative_int(compressed_size, "Compressed size")
        validate_type(timestamp, "Timestamp", str)

        self.tree = tree
        self.payload = payload
        self.original_size = original_size
        self.compressed_size = compressed_size
        self.timestamp = timestamp

    @property
    def compression_ratio(self) -> float:
        return compression_ratio(self.original_size, self.compressed_size)

    @staticmethod
    def from_result(result: CompressionResult, timestamp: Optional[str] = None) -> "HuffRecord":
        """
        Wrap a compression result, stamping the current UTC time when no timestamp is given.
        """
        validate_type(result, "Result", CompressionResult)
        if timestamp is None:
            timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return HuffRecord(result.tree, result.payload, result.original_size, result.compressed_size, timestamp)

    @staticmethod
    def serialize(record: "HuffRecord") -> str:
        """
        Serialize a HuffRecord into JSON text.

        The format is one object with the keys tree, compressed, originalSize,
        compressedSize and timestamp.
        """
        return json.dumps({
            "tree": record.tree,
            "compressed": record.payload,
            "originalSize": record.original_size,
            "compressedSize": record.compressed_size,
            "timestamp": record.timestamp,
        })

    @staticmethod
    def deserialize(serialized: str) -> "HuffRecord":
        """
        Deserialize JSON text into a HuffRecord.
        The text is expected to be the same as produced by serialize().
        """
        validate_type(serialized, "Serialized record", str)
        try:
            data = json.loads(serialized)
        except ValueError as e:
            raise CorruptPayloadError("Record is not valid JSON") from e
        if not isinstance(data, dict):
            raise CorruptPayloadError("Record must be a JSON object")
        missing = [key for key in ("tree", "compressed", "originalSize", "compressedSize") if key not in data]
        if missing:
            raise CorruptPayloadError(f"Record is missing fields: {', '.join(missing)}")
        try:
            return HuffRecord(
                data["tree"],
                data["compressed"],
                data["originalSize"],
                data["compressedSize"],
                data.get("timestamp", ""),
            )
        except ValueError as e:
            raise CorruptPayloadError(f"Record field is invalid: {e}") from e


class HuffRecordFile:
    """Provides methods to write and read a HuffRecord instance to/from a file."""

    @staticmethod
    def write_to_file(record: HuffRecord, file_path: str) -> None:
        """
        Serialize the record and write it as text to the given file.

        Args:
            record (HuffRecord): The record to write.
            file_path (str): The path to the output file.
        """
        validate_type(record, "Record", HuffRecord)
        validate_type(file_path, "File path", str)
        with open(file_path, "w", encoding=TEXT_ENCODING) as file:
            file.write(HuffRecord.serialize(record))

    @staticmethod
    def read_from_file(file_path: str) -> HuffRecord:
        """
        Read text from the given file and deserialize it into a HuffRecord instance.

        Args:
            file_path (str): The path to the .huff file.

        Returns:
            HuffRecord: The deserialized record.
        """
        validate_type(file_path, "File path", str)
        validate_file_exists(file_path)
        with open(file_path, "r", encoding=TEXT_ENCODING) as file:
            serialized = file.read()
        return HuffRecord.deserialize(serialized)


def compress(text: str) -> CompressionResult:
    """Compress text with the default settings."""
    return HuffmanCodec().compress(text)


def decompress(payload: str, tree: Optional[Dict[str, Any]]) -> str:
    """Decompress a payload with the default settings."""
    return HuffmanCodec().decompress(payload, tree)
