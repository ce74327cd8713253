"""
coders.py

Code generation, bit packing and the Huffman coder.
"""


import abc
import base64
import binascii
import numpy as np
from typing import List, Optional, Tuple

from .errors import CorruptPayloadError, InvalidTreeError
from .logger import Logger, CodingProgressStep, DecodingProgressStep, SymbolCodeLog
from .models import CodeTable, FrequencyTable, Node, Symbol
from .trees import build_tree
from .validators import validate_bit_string, validate_type


def generate_codes(root: Node) -> CodeTable:
    """
    Walk the tree and assign each leaf the path leading to it.

    Left steps append '0' and right steps append '1'. A lone leaf root gets
    the one-bit code '0' so every symbol still costs one bit.

    Args:
        root (Node): The tree root.

    Returns:
        CodeTable: The code of every symbol in the tree.
    """
    if root is None:
        raise InvalidTreeError("Huffman tree is missing")
    table = CodeTable()
    if root.is_leaf():
        table.add(root.symbol, "0")
        return table

    stack = [(root, "")]
    while stack:
        node, path = stack.pop()
        if node.is_leaf():
            table.add(node.symbol, path)
        else:
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
    return table


class BitPacker:
    """
    Converts bit strings to and from base64 text.
    """

    @staticmethod
    def pack(bits: str) -> Tuple[str, int]:
        """
        Pack a bit string into base64, MSB first, zero padded to a byte boundary.

        Args:
            bits (str): A string of '0' and '1'.

        Returns:
            Tuple[str, int]: The base64 text and the unpadded bit length.
        """
        validate_bit_string(bits)
        if not bits:
            return "", 0
        bit_array = np.frombuffer(bits.encode("ascii"), dtype=np.uint8) - ord("0")
        packed = np.packbits(bit_array)
        return base64.b64encode(packed.tobytes()).decode("ascii"), len(bits)

    @staticmethod
    def unpack(data: str, bit_length: int) -> str:
        """
        Unpack base64 text into its first bit_length bits.

        Args:
            data (str): The base64 text produced by pack().
            bit_length (int): The unpadded bit length recorded at pack time.

        Returns:
            str: The bit string, padding removed.

        Raises:
            CorruptPayloadError: If the text is not base64 or holds fewer bits than requested.
        """
        if not isinstance(data, str):
            raise CorruptPayloadError("Packed bits must be a base64 string")
        if isinstance(bit_length, bool) or not isinstance(bit_length, int) or bit_length < 0:
            raise CorruptPayloadError(f"Invalid bit length: {bit_length!r}")
        try:
            raw = base64.b64decode(data.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise CorruptPayloadError("Packed bits are not valid base64") from e

        available = len(raw) * 8
        if bit_length > available or available - bit_length >= 8:
            raise CorruptPayloadError(
                f"Bit length {bit_length} does not match {len(raw)} packed bytes"
            )
        if bit_length == 0:
            return ""
        bit_array = np.unpackbits(np.frombuffer(raw, dtype=np.uint8))[:bit_length]
        return (bit_array + ord("0")).tobytes().decode("ascii")


class CoderBase(abc.ABC):
    """
    Abstract base class for coders.
    """

    def __init__(self) -> None:
        """Initialize the coder."""
        pass

    @abc.abstractmethod
    def encode(self, symbols: List[Symbol], table: FrequencyTable) -> Tuple[Node, str]:
        """
        Encode a sequence of symbols into a bit string.

        Args:
            symbols (List[Symbol]): The symbols to be encoded.
            table (FrequencyTable): The counts of those symbols.

        Returns:
            Tuple[Node, str]: The tree used for encoding and the encoded bits.
        """
        pass

    @abc.abstractmethod
    def decode(self, bits: str, root: Node) -> List[Symbol]:
        """
        Decode a bit string back into symbols.

        Args:
            bits (str): The encoded bits.
            root (Node): The tree used during encoding.

        Returns:
            List[Symbol]: The decoded list of symbols.
        """
        pass


class HuffmanCoder(CoderBase):
    """
    Static Huffman coder: one tree per message, built from the message's own counts.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self.logger: Optional[Logger] = logger

    def encode(self, symbols: List[Symbol], table: FrequencyTable) -> Tuple[Node, str]:
        validate_type(symbols, "Symbols", list)
        validate_type(table, "Table", FrequencyTable)
        root = build_tree(table, self.logger)
        codes = generate_codes(root)

        if self.logger is not None:
            for entry in table.items():
                self.logger.log(SymbolCodeLog(entry.symbol, entry.frequency, codes.get_code(entry.symbol)))

        return root, self.encode_with_codes(symbols, codes)

    def encode_with_codes(self, symbols: List[Symbol], codes: CodeTable) -> str:
        """
        Concatenate the code of every symbol.

        Raises:
            ValueError: If a symbol has no code.
        """
        if self.logger is not None:
            self.logger.reset_progress(CodingProgressStep)
        parts = []
        for symbol in symbols:
            if symbol not in codes:
                raise ValueError(f"No code for symbol {symbol!r}")
            parts.append(codes.get_code(symbol))
            if self.logger is not None:
                self.logger.log(CodingProgressStep("Encoding symbols", len(symbols)))
        return "".join(parts)

    def decode(self, bits: str, root: Node) -> List[Symbol]:
        """
        Walk the tree one bit at a time, emitting a symbol at each leaf.

        A lone leaf root decodes every bit to its symbol.

        Raises:
            InvalidTreeError: If the tree is missing.
            CorruptPayloadError: If the bits end partway down the tree.
        """
        if root is None:
            raise InvalidTreeError("Huffman tree is missing")
        validate_bit_string(bits)

        if root.is_leaf():
            return [root.symbol] * len(bits)

        if self.logger is not None:
            self.logger.reset_progress(DecodingProgressStep)
        decoded: List[Symbol] = []
        node = root
        for bit in bits:
            node = node.left if bit == "0" else node.right
            if node.is_leaf():
                decoded.append(node.symbol)
                node = root
                if self.logger is not None:
                    self.logger.log(DecodingProgressStep("Decoding symbols"))

        if node is not root:
            raise CorruptPayloadError("Bit stream ends in the middle of a code")
        return decoded


def encoded_size(codes: CodeTable, table: FrequencyTable) -> int:
    """
    Total encoded size in bits: the sum over symbols of code length times count.
    """
    return sum(len(codes.get_code(entry.symbol)) * entry.frequency for entry in table.items())
