import abc
from typing import List, Tuple, Optional

from .models import Symbol, FrequencyTable
from .logger import Logger, PreprocessingProgressStep
from .settings import DEFAULT_BITS_PER_SYMBOL


class BasePreprocessor(abc.ABC):
    @property
    @abc.abstractmethod
    def bits_per_symbol(self) -> int:
        """Return the number of bits one symbol occupies in the uncompressed text."""
        pass

    @abc.abstractmethod
    def convert_to_symbols(self, text: str) -> Tuple[List[Symbol], FrequencyTable]:
        """
        Convert text to a list of symbols and count them.

        Args:
            text (str): The input text.

        Returns:
            Tuple[List[Symbol], FrequencyTable]: The symbols in input order and their frequency table.
        """
        pass

    @abc.abstractmethod
    def convert_from_symbols(self, symbols: List[Symbol]) -> str:
        """
        Convert a list of symbols back to text.

        Args:
            symbols (List[Symbol]): The list of symbols.

        Returns:
            str: The reconstructed text.
        """
        pass

    def construct_frequency_table(self, symbols: List[Symbol]) -> FrequencyTable:
        """
        Count a list of symbols.

        Args:
            symbols (List[Symbol]): A collection of symbols.

        Returns:
            FrequencyTable: The counts, in first-occurrence order.
        """
        table = FrequencyTable()
        table.add_multiple(symbols)
        return table

    def original_size(self, symbol_count: int) -> int:
        """Size in bits of symbol_count uncompressed symbols."""
        return symbol_count * self.bits_per_symbol


class CharPreprocessor(BasePreprocessor):
    """
    Character Preprocessor: each character of the text is assigned to a symbol.
    """
    def __init__(self, bits_per_symbol: int = DEFAULT_BITS_PER_SYMBOL, logger: Optional[Logger] = None) -> None:
        if isinstance(bits_per_symbol, bool) or not isinstance(bits_per_symbol, int) or bits_per_symbol < 1:
            raise ValueError("bits_per_symbol must be a positive int")
        self._bits_per_symbol: int = bits_per_symbol
        self.logger: Optional[Logger] = logger

    @property
    def bits_per_symbol(self) -> int:
        return self._bits_per_symbol

    def convert_to_symbols(self, text: str) -> Tuple[List[Symbol], FrequencyTable]:
        if not isinstance(text, str):
            raise ValueError("Text should be in form of str")

        if self.logger is not None:
            self.logger.reset_progress(PreprocessingProgressStep)
        table = FrequencyTable()
        symbols: List[Symbol] = []
        cache = {}
        for char in text:
            symbol = cache.get(char)
            if symbol is None:
                symbol = Symbol(char)
                cache[char] = symbol
            table.add(symbol)
            symbols.append(symbol)
            if self.logger is not None:
                self.logger.log(PreprocessingProgressStep("Converting text to symbols", len(text)))

        return symbols, table

    def convert_from_symbols(self, symbols: List[Symbol]) -> str:
        return "".join(symbol.data for symbol in symbols)
