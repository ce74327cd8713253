import os
import sys
import time

from huffcodec.codecs import *
from huffcodec.logger import *
from huffcodec.performance_display import *
from huffcodec.settings import HUFF_FILE_EXTENSION

lorem_ipsum_1par = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec a consectetur ligula. Nunc erat dolor, tristique sed sagittis quis, dignissim eget erat. Vivamus enim lorem, finibus sit amet maximus eget, condimentum sit amet massa. Fusce aliquet velit sit amet ex pretium, ut tincidunt dolor semper. Nulla pellentesque eget massa quis rhoncus. Curabitur maximus quis mauris vel sollicitudin. Integer tristique ut nisl sed consequat. Donec a ipsum ut sem cursus ullamcorper. Sed finibus, sapien id volutpat tempus, turpis odio placerat purus, sit amet scelerisque nibh sem a magna. Sed justo sem, facilisis at imperdiet eu, tincidunt vel quam. Ut id sollicitudin eros, sit amet bibendum tortor. Lorem ipsum dolor sit amet, consectetur adipiscing elit."


def main(output_folder="huffman_experiment_output"):
    if len(sys.argv) > 1:
        with open(sys.argv[1], "r", encoding="utf-8") as f:
            text = f.read()
    else:
        text = lorem_ipsum_1par

    if not os.path.exists(output_folder):
        os.makedirs(output_folder)

    logger = Logger()
    logger.display_info = False
    codec = HuffmanCodec(logger=logger)

    start = time.time()
    result = codec.compress(text)
    compression_time = time.time() - start
    print(f"Size of original data: {result.original_size} bits")
    print(f"Size of compressed data: {result.compressed_size} bits")
    print(f"Compression ratio: {result.compression_ratio:.2f}% ({compression_time:.4f}s)")

    record_path = os.path.join(output_folder, "experiment" + HUFF_FILE_EXTENSION)
    HuffRecordFile.write_to_file(HuffRecord.from_result(result), record_path)
    record = HuffRecordFile.read_from_file(record_path)

    start = time.time()
    decompressed = codec.decompress(record.payload, record.tree)
    print(f"Decompressed {len(decompressed)} characters ({time.time() - start:.4f}s)")

    if text == decompressed:
        print("Data integrity preserved.")
    else:
        print("Data integrity compromised.")

    stats = codec.symbol_statistics(text)
    print(f"Entropy: {entropy(stats):.4f} bits/symbol, average code length: {average_code_length(stats):.4f} bits/symbol")
    for row in stats[:10]:
        print(f"  {row.symbol!r:6} {row.count:6} {row.probability:.4f} {row.code}")

    pm = PerformanceDisplay(logger.logs)
    pm.generate_code_length_plot(save_path=os.path.join(output_folder, "code_lengths.png"))
    pm.generate_compression_ratio_plot(save_path=os.path.join(output_folder, "compression_ratio.png"))
    logger.save(os.path.join(output_folder, "experiment.log"))

if __name__ == "__main__":
    main()
