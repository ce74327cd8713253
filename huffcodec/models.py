"""
models.py

The shared objects used in huffcodec.

"""


from typing import Optional, Iterable, Iterator, List, Dict, Union

class Symbol:
    """
    Represents a single symbol (one character) of the text.
    """
    def __init__(self, data: str) -> None:
        if not isinstance(data, str):
            raise ValueError("Data must be of type str")
        if len(data) == 0:
            raise ValueError("Data must not be empty")
        self.data: str = data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Symbol):
            return self.data == other.data
        return False

    def __str__(self) -> str:
        return self.data

    def __repr__(self) -> str:
        return repr(self.data)

    def __hash__(self) -> int:
        return hash(self.data)


class SymbolFrequency:
    """
    Represents a symbol together with its frequency.
    """
    def __init__(self, symbol: Symbol, frequency: int) -> None:
        self.symbol: Symbol = symbol
        self.frequency: int = frequency

    def __str__(self) -> str:
        return f"[{self.symbol!r}, {self.frequency}]"

    def __repr__(self) -> str:
        return f"[{self.symbol!r}, {self.frequency}]"


class FrequencyTable:
    """
    Occurrence counts of the symbols found in the data.

    Symbols are kept in the order they were first added, which the tree
    builder relies on to order equal-weight leaves.
    """
    def __init__(self) -> None:
        self._counts: Dict[Symbol, int] = {}

    def add(self, symbol: Symbol, count: int = 1) -> bool:
        """
        Add occurrences of a symbol to the table.

        Args:
            symbol (Symbol): The symbol to count.
            count (int): Occurrences to add, must be positive.

        Returns:
            bool: True if the symbol was already present; False if added.
        """
        if not isinstance(symbol, Symbol):
            raise ValueError("Symbol must be of type Symbol")
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValueError("Count must be a positive int")
        present = symbol in self._counts
        self._counts[symbol] = self._counts.get(symbol, 0) + count
        return present

    def add_multiple(self, symbols: Iterable[Symbol]) -> int:
        """
        Count every symbol of an iterable.

        Returns:
            int: Count of symbols that were already present.
        """
        count = 0
        for symbol in symbols:
            if self.add(symbol):
                count += 1
        return count

    def get_size(self) -> int:
        """Number of distinct symbols."""
        return len(self._counts)

    def get_total(self) -> int:
        """Sum of all counts."""
        return sum(self._counts.values())

    def get_frequency(self, symbol: Symbol) -> int:
        return self._counts.get(symbol, 0)

    def contains(self, symbol: Symbol) -> bool:
        return symbol in self._counts

    def items(self) -> List[SymbolFrequency]:
        """Symbols with their counts, in first-occurrence order."""
        return [SymbolFrequency(symbol, freq) for symbol, freq in self._counts.items()]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyTable):
            return False
        return self._counts == other._counts


class LeafNode:
    """A tree node holding exactly one symbol."""
    def __init__(self, symbol: Symbol, weight: int = 0) -> None:
        self.symbol: Symbol = symbol
        self.weight: int = weight

    def is_leaf(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"LeafNode({self.symbol!r}, {self.weight})"


class InternalNode:
    """A tree node with no symbol and exactly two children."""
    def __init__(self, left: "Node", right: "Node", weight: Optional[int] = None) -> None:
        if left is None or right is None:
            raise ValueError("Internal node requires two children")
        self.left: Node = left
        self.right: Node = right
        self.weight: int = left.weight + right.weight if weight is None else weight

    def is_leaf(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"InternalNode({self.weight})"


Node = Union[LeafNode, InternalNode]


class CodeTable:
    """
    Mapping from each symbol to its bit string code.
    """
    def __init__(self) -> None:
        self._codes: Dict[Symbol, str] = {}

    def add(self, symbol: Symbol, code: str) -> None:
        if symbol in self._codes:
            raise ValueError(f"Symbol {symbol!r} already has a code")
        if not code:
            raise ValueError("Code must not be empty")
        self._codes[symbol] = code

    def get_code(self, symbol: Symbol) -> str:
        return self._codes[symbol]

    def get_size(self) -> int:
        return len(self._codes)

    def is_prefix_free(self) -> bool:
        """
        Check that no code is a prefix of another.

        Returns:
            bool: True if prefix free, False otherwise.
        """
        codes = sorted(self._codes.values())
        for current, following in zip(codes, codes[1:]):
            if following.startswith(current):
                return False
        return True

    def as_dict(self) -> Dict[str, str]:
        return {symbol.data: code for symbol, code in self._codes.items()}

    def __contains__(self, symbol: Symbol) -> bool:
        return symbol in self._codes

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)
