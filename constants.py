"""Global constants and default configuration values.

Import these values where needed instead of hardcoding them.
"""

DEFAULT_MAX_POINTS = 200
DEFAULT_COLORMAP = "tab10"
DEFAULT_YAXIS = "linear"

LINE_WIDTH = 1.5
BAND_ALPHA = 0.25
GRID_ALPHA = 0.3
SUBPLOT_FIGSIZE = (6, 4)  # inches per subplot

DEFAULT_RENDER_INTERVAL = 2.0  # seconds
DEFAULT_PLOT_DPI = 120
DEFAULT_PLOT_FILENAME = "live_plot.png"
DEFAULT_GIF_FPS = 5

DEFAULT_RESULT_ROOT = "Result"
