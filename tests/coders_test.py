import unittest

from huffcodec.coders import BitPacker, HuffmanCoder, generate_codes, encoded_size
from huffcodec.errors import CorruptPayloadError, InvalidTreeError
from huffcodec.logger import Logger, SymbolCodeLog
from huffcodec.models import FrequencyTable, Symbol, LeafNode
from huffcodec.preprocessors import CharPreprocessor
from huffcodec.trees import build_tree


def table_for(text):
    table = FrequencyTable()
    table.add_multiple([Symbol(c) for c in text])
    return table


class TestGenerateCodes(unittest.TestCase):
    def test_abracadabra_codes(self):
        table = table_for("abracadabra")
        codes = generate_codes(build_tree(table))
        self.assertEqual(codes.as_dict(), {'a': "0", 'r': "10", 'c': "1100", 'd': "1101", 'b': "111"})
        self.assertEqual(encoded_size(codes, table), 23)

    def test_single_symbol_gets_one_bit(self):
        codes = generate_codes(build_tree(table_for("aaaa")))
        self.assertEqual(codes.as_dict(), {'a': "0"})

    def test_codes_are_prefix_free(self):
        texts = [
            "ab",
            "abracadabra",
            "the quick brown fox jumps over the lazy dog",
            "aaaaaaaaaaaaaaaabbbbbbbbcccccdddeef",
            "".join(chr(32 + i) * (i + 1) for i in range(90)),
        ]
        for text in texts:
            table = table_for(text)
            codes = generate_codes(build_tree(table))
            self.assertEqual(codes.get_size(), table.get_size())
            self.assertTrue(codes.is_prefix_free(), text)

    def test_missing_tree(self):
        with self.assertRaises(InvalidTreeError):
            generate_codes(None)


class TestBitPacker(unittest.TestCase):
    def test_pack_full_byte(self):
        self.assertEqual(BitPacker.pack("10101010"), ("qg==", 8))

    def test_pack_pads_with_zeros(self):
        self.assertEqual(BitPacker.pack("101"), ("oA==", 3))

    def test_unpack_drops_padding(self):
        self.assertEqual(BitPacker.unpack("oA==", 3), "101")
        self.assertEqual(BitPacker.unpack("qg==", 8), "10101010")

    def test_trailing_zero_bits_survive(self):
        bits = "1100100"
        packed, length = BitPacker.pack(bits)
        self.assertEqual(BitPacker.unpack(packed, length), bits)

    def test_empty_bits(self):
        self.assertEqual(BitPacker.pack(""), ("", 0))
        self.assertEqual(BitPacker.unpack("", 0), "")

    def test_pack_rejects_non_bits(self):
        with self.assertRaises(ValueError):
            BitPacker.pack("10201")
        with self.assertRaises(ValueError):
            BitPacker.pack([1, 0])

    def test_unpack_rejects_bad_length(self):
        with self.assertRaises(CorruptPayloadError):
            BitPacker.unpack("oA==", 9)
        with self.assertRaises(CorruptPayloadError):
            BitPacker.unpack("oA==", -1)
        # one whole byte more than the length needs
        with self.assertRaises(CorruptPayloadError):
            BitPacker.unpack("qqo=", 3)

    def test_unpack_rejects_bad_base64(self):
        with self.assertRaises(CorruptPayloadError):
            BitPacker.unpack("oA=", 3)
        with self.assertRaises(CorruptPayloadError):
            BitPacker.unpack("o!==", 3)
        with self.assertRaises(CorruptPayloadError):
            BitPacker.unpack(None, 3)


class TestHuffmanCoder(unittest.TestCase):
    def setUp(self):
        self.preprocessor = CharPreprocessor()
        self.coder = HuffmanCoder()

    def test_encode_decode(self):
        symbols, table = self.preprocessor.convert_to_symbols("abracadabra")
        root, bits = self.coder.encode(symbols, table)
        self.assertEqual(bits, "01111001100011010111100")
        self.assertEqual(self.coder.decode(bits, root), symbols)

    def test_single_leaf_decodes_every_bit(self):
        root = LeafNode(Symbol('x'), 4)
        self.assertEqual(self.coder.decode("0110", root), [Symbol('x')] * 4)
        self.assertEqual(self.coder.decode("", root), [])

    def test_decode_ending_mid_code(self):
        symbols, table = self.preprocessor.convert_to_symbols("abracadabra")
        root, _ = self.coder.encode(symbols, table)
        with self.assertRaises(CorruptPayloadError):
            self.coder.decode("01", root)

    def test_decode_missing_tree(self):
        with self.assertRaises(InvalidTreeError):
            self.coder.decode("0", None)

    def test_encode_with_unknown_symbol(self):
        codes = generate_codes(build_tree(table_for("ab")))
        with self.assertRaises(ValueError):
            self.coder.encode_with_codes([Symbol('a'), Symbol('z')], codes)

    def test_logs_symbol_codes(self):
        logger = Logger()
        coder = HuffmanCoder(logger)
        symbols, table = self.preprocessor.convert_to_symbols("abracadabra")
        coder.encode(symbols, table)
        logs = [log for log in logger.logs if isinstance(log, SymbolCodeLog)]
        self.assertEqual(len(logs), 5)
        self.assertEqual({log.symbol.data: log.code for log in logs}["b"], "111")

if __name__ == '__main__':
    unittest.main()
