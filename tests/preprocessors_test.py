import unittest
from huffcodec.preprocessors import CharPreprocessor
from huffcodec.models import Symbol
from huffcodec.logger import Logger

class TestCharPreprocessor(unittest.TestCase):
    def setUp(self):
        self.logger = Logger()
        self.logger.display_progress = False
        self.preprocessor = CharPreprocessor(logger=self.logger)

    def test_convert_to_symbols(self):
        symbols, table = self.preprocessor.convert_to_symbols("aba")
        self.assertEqual(symbols, [Symbol('a'), Symbol('b'), Symbol('a')])
        self.assertEqual(table.get_size(), 2)
        self.assertEqual(table.get_frequency(Symbol('a')), 2)
        self.assertEqual([entry.symbol for entry in table.items()], [Symbol('a'), Symbol('b')])

    def test_symbols_are_shared(self):
        symbols, _ = self.preprocessor.convert_to_symbols("aa")
        self.assertIs(symbols[0], symbols[1])

    def test_convert_to_symbols_invalid(self):
        with self.assertRaises(ValueError):
            self.preprocessor.convert_to_symbols(b"\xff")

    def test_convert_from_symbols(self):
        text = "Grüße ☃"
        symbols, _ = self.preprocessor.convert_to_symbols(text)
        self.assertEqual(self.preprocessor.convert_from_symbols(symbols), text)

    def test_construct_frequency_table(self):
        table = self.preprocessor.construct_frequency_table([Symbol('x'), Symbol('y'), Symbol('x')])
        self.assertEqual(table.get_frequency(Symbol('x')), 2)

    def test_original_size(self):
        self.assertEqual(self.preprocessor.bits_per_symbol, 8)
        self.assertEqual(self.preprocessor.original_size(11), 88)
        self.assertEqual(CharPreprocessor(bits_per_symbol=32).original_size(2), 64)

    def test_invalid_bits_per_symbol(self):
        with self.assertRaises(ValueError):
            CharPreprocessor(bits_per_symbol=0)
        with self.assertRaises(ValueError):
            CharPreprocessor(bits_per_symbol=True)

if __name__ == '__main__':
    unittest.main()
