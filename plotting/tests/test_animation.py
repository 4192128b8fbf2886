from PIL import Image

from plotting import GifRecorder, plot_logger, update_plot
from timeseries import TimeSeriesLogger


def test_gif_has_one_frame_per_capture(tmp_path):
    out_file = tmp_path / "anim" / "loss.gif"
    logger = TimeSeriesLogger(1)
    logger.append(0, 1.0)
    chart = plot_logger(logger)
    with GifRecorder(chart.figure, str(out_file), fps=10, dpi=40) as gif:
        gif.capture()
        for t in range(1, 3):
            logger.append(t, 1.0 / (t + 1))
            update_plot(chart, logger)
            gif.capture()
    assert gif.frames == 3
    with Image.open(out_file) as img:
        assert img.n_frames > 1


def test_no_frames_no_file(tmp_path):
    out_file = tmp_path / "empty.gif"
    logger = TimeSeriesLogger(1)
    logger.append(0, 1.0)
    chart = plot_logger(logger)
    recorder = GifRecorder(chart.figure, str(out_file))
    recorder.close()
    recorder.close()
    assert not out_file.exists()
