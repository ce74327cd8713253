"""
errors.py

Exceptions raised by huffcodec.
"""


class CodecError(ValueError):
    """Base class for all huffcodec errors."""
    pass


class EmptyInputError(CodecError):
    """Raised when there is nothing to compress."""
    def __init__(self, message: str = "Empty input cannot be compressed") -> None:
        super().__init__(message)


class TreeConstructionError(CodecError):
    """Raised when a Huffman tree cannot be built from the frequency table."""
    pass


class CorruptPayloadError(CodecError):
    """Raised when a payload cannot be parsed or decoded."""
    pass


class InvalidTreeError(CodecError):
    """Raised when a serialized tree is missing or cannot be reconstructed."""
    pass
