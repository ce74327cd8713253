import os
import tempfile
import unittest
from huffcodec.settings import CodecSettings, DEFAULT_BITS_PER_SYMBOL, HUFF_FILE_EXTENSION
from huffcodec.validators import validate_type, validate_non_negative_int, validate_bit_string, validate_file_exists

class TestCodecSettings(unittest.TestCase):
    def test_defaults(self):
        settings = CodecSettings()
        self.assertEqual(settings.bits_per_symbol, DEFAULT_BITS_PER_SYMBOL)
        self.assertEqual(HUFF_FILE_EXTENSION, ".huff")

    def test_invalid_bits_per_symbol(self):
        for value in (0, -8, 8.0, "8", False):
            with self.assertRaises(ValueError):
                CodecSettings(bits_per_symbol=value)

class TestValidators(unittest.TestCase):
    def test_validate_type(self):
        validate_type("x", "Name", str)
        with self.assertRaises(ValueError):
            validate_type(1, "Name", str)

    def test_validate_non_negative_int(self):
        validate_non_negative_int(0, "Size")
        for value in (-1, 1.5, True, None):
            with self.assertRaises(ValueError):
                validate_non_negative_int(value, "Size")

    def test_validate_bit_string(self):
        validate_bit_string("")
        validate_bit_string("0110")
        with self.assertRaises(ValueError):
            validate_bit_string("012")
        with self.assertRaises(ValueError):
            validate_bit_string(b"01")

    def test_validate_file_exists(self):
        with tempfile.NamedTemporaryFile(delete=False) as temp_file:
            temp_file_name = temp_file.name
        try:
            validate_file_exists(temp_file_name)
        finally:
            os.remove(temp_file_name)
        with self.assertRaises(ValueError):
            validate_file_exists(temp_file_name)

if __name__ == '__main__':
    unittest.main()
