#settings.py

DEFAULT_BITS_PER_SYMBOL = 8
HUFF_FILE_EXTENSION = ".huff"
TEXT_ENCODING = "utf-8"


class CodecSettings:
    """
    Settings for the Huffman codec.
    """

    def __init__(self, bits_per_symbol: int = DEFAULT_BITS_PER_SYMBOL) -> None:
        if not isinstance(bits_per_symbol, int) or isinstance(bits_per_symbol, bool):
            raise ValueError("bits_per_symbol must be of type int")
        if bits_per_symbol < 1:
            raise ValueError("bits_per_symbol must be at least 1")
        self.bits_per_symbol: int = bits_per_symbol
