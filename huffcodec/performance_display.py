import matplotlib.pyplot as plt
import numpy as np

from .logger import CodingLog, SymbolCodeLog
from .codecs import compression_ratio


class PerformanceDisplay:
    def __init__(self, logs,
                 fig_size=(10, 6), dpi=100, font_size=12,
                 dot_size=20, dot_alpha=0.6,
                 dot_color='blue',
                 trend_line_color='red', trend_line_linewidth=2,
                 moving_avg_window=5):
        self.logs = logs
        self.fig_size = fig_size
        self.dpi = dpi
        self.font_size = font_size
        self.dot_size = dot_size
        self.dot_alpha = dot_alpha
        self.dot_color = dot_color
        self.trend_line_color = trend_line_color
        self.trend_line_linewidth = trend_line_linewidth
        self.moving_avg_window = moving_avg_window

    def _moving_average(self, data):
        if self.moving_avg_window < 1:
            raise ValueError("moving_avg_window must be at least 1")
        # 'same' mode returns max(len(data), window) points
        window = min(self.moving_avg_window, len(data))
        return np.convolve(data, np.ones(window) / window, mode='same')

    def _plot_graph(self, y_values, title, xlabel, ylabel, show_graph=False, save_path=None):
        if not y_values:
            print(f"No data available for {title}.")
            return False

        x = np.arange(1, len(y_values) + 1)
        y = np.array(y_values, dtype=np.float64)
        trend = self._moving_average(y)

        plt.figure(figsize=self.fig_size, dpi=self.dpi)

        plt.scatter(x, y, s=self.dot_size, alpha=self.dot_alpha, color=self.dot_color, label="Data points")
        plt.plot(x, trend, color=self.trend_line_color, linewidth=self.trend_line_linewidth, label="Moving Average Trend")

        plt.title(title, fontsize=self.font_size + 2)
        plt.xlabel(xlabel, fontsize=self.font_size)
        plt.ylabel(ylabel, fontsize=self.font_size)
        plt.grid(True)
        plt.legend(fontsize=self.font_size)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path)
        if show_graph:
            plt.show()
        else:
            plt.close()
        return True

    def generate_code_length_plot(self, show_graphs=False, save_path=None):
        """Code length of every symbol, most frequent symbol first."""
        entries = [log for log in self.logs if isinstance(log, SymbolCodeLog)]
        entries.sort(key=lambda log: -log.frequency)
        values = [len(log.code) for log in entries]
        return self._plot_graph(values, "Code Length by Symbol Rank", "Symbol Rank (by frequency)", "Code Length (bits)", show_graphs, save_path)

    def generate_compression_ratio_plot(self, show_graphs=False, save_path=None):
        values = [compression_ratio(log.symbol_size, log.encoded_size) for log in self.logs if isinstance(log, CodingLog)]
        return self._plot_graph(values, "Compression Ratio per Call", "Log Entry Order", "Saved (%)", show_graphs, save_path)
