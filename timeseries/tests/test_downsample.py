import numpy as np
import pytest

from timeseries import (
    ConfigError,
    EmptyLoggerError,
    TimeSeriesLogger,
    bucket_bounds,
    buckets,
    downsample,
)


def make_logger(n, variable_count=1, fn=None):
    fn = fn or (lambda t: [1.0 / t] * variable_count)
    logger = TimeSeriesLogger(variable_count)
    for t in range(1, n + 1):
        logger.append(t, fn(t))
    return logger


def test_small_logger_passes_through():
    logger = make_logger(50, variable_count=2, fn=lambda t: [t, -t * 0.5])
    data = downsample(logger, max_points=50)
    assert not data.aggregated
    assert len(data) == 50
    np.testing.assert_array_equal(data.x, np.arange(1, 51))
    np.testing.assert_array_equal(data.mean, logger.values())
    np.testing.assert_array_equal(data.lower, data.mean)
    np.testing.assert_array_equal(data.upper, data.mean)


def test_large_logger_is_bucketed():
    logger = make_logger(1000)
    data = downsample(logger, max_points=200)
    assert data.aggregated
    assert len(data) == 200
    assert data.sizes.sum() == 1000
    assert np.all(data.sizes == 5)
    assert np.all(data.lower <= data.mean)
    assert np.all(data.mean <= data.upper)

    assert data.mean[0, 0] == pytest.approx(np.mean([1.0 / t for t in range(1, 6)]))
    assert data.x[0] == 1
    assert data.x[-1] == 996
    assert data.mean[-1, 0] == pytest.approx(1.0 / 1000, rel=1e-2)
    assert data.upper[-1, 0] - data.lower[-1, 0] < 1e-5


def test_uneven_bucket_sizes():
    n, m = 1001, 200
    data = downsample(make_logger(n), max_points=m)
    assert len(data) == m
    assert data.sizes.sum() == n
    assert data.sizes.max() - data.sizes.min() <= 1
    assert data.sizes.max() <= -(-n // m)

    bounds = bucket_bounds(n, m)
    assert len(bounds) == m
    assert bounds[0][0] == 0 and bounds[-1][1] == n
    assert all(a[1] == b[0] for a, b in zip(bounds, bounds[1:]))


def test_single_sample_buckets_collapse():
    # 201 samples into 200 buckets: all but one bucket hold a single sample
    data = downsample(make_logger(201), max_points=200)
    single = data.sizes == 1
    assert single.sum() == 199
    np.testing.assert_array_equal(data.lower[single], data.mean[single])
    np.testing.assert_array_equal(data.upper[single], data.mean[single])


def test_mean_stays_inside_band_for_constant_values():
    logger = TimeSeriesLogger(1)
    for t in range(30):
        logger.append(t, 0.1)
    data = downsample(logger, max_points=10)
    assert np.all(data.lower <= data.mean)
    assert np.all(data.mean <= data.upper)


def test_runs_overlap_inside_buckets():
    logger = TimeSeriesLogger(1)
    for run in range(2):
        for step in range(10):
            logger.append(step, float(run * 10 + step))
    data = downsample(logger, max_points=4)
    assert data.sizes.tolist() == [5, 5, 5, 5]
    # timestamps reset with the second run
    assert data.x.tolist() == [0, 5, 0, 5]
    assert data.lower[2, 0] == 10.0 and data.upper[2, 0] == 14.0


def test_buckets_match_downsample():
    logger = make_logger(23, variable_count=2)
    result = buckets(logger, max_points=5)
    data = downsample(logger, max_points=5)
    assert [b.size for b in result] == data.sizes.tolist()
    assert result[2].timestamp == data.x[2]
    np.testing.assert_array_equal(result[2].mean, data.mean[2])
    np.testing.assert_array_equal(result[4].maximum, data.upper[4])


def test_idempotent():
    logger = make_logger(777, variable_count=3)
    first = downsample(logger, max_points=100)
    second = downsample(logger, max_points=100)
    np.testing.assert_array_equal(first.x, second.x)
    np.testing.assert_array_equal(first.mean, second.mean)
    np.testing.assert_array_equal(first.lower, second.lower)
    np.testing.assert_array_equal(first.upper, second.upper)


def test_snapshot_does_not_follow_logger():
    logger = make_logger(10)
    data = downsample(logger, max_points=20)
    logger.append(11, 5.0)
    assert len(data) == 10


def test_empty_logger():
    with pytest.raises(EmptyLoggerError):
        downsample(TimeSeriesLogger(1))


@pytest.mark.parametrize("max_points", [0, -5, 2.5, None])
def test_invalid_max_points(max_points):
    with pytest.raises(ConfigError):
        downsample(make_logger(5), max_points=max_points)


def test_every_bucket_matches_its_samples():
    n, m = 1001, 200
    logger = make_logger(n, variable_count=3, fn=lambda t: [np.sin(t), t % 7, -1.0 / t])
    values = logger.values()
    timestamps = logger.timestamps
    data = downsample(logger, max_points=m)
    bounds = bucket_bounds(n, m)
    assert len(bounds) == len(data)
    for i, (start, stop) in enumerate(bounds):
        chunk = values[start:stop]
        assert data.x[i] == timestamps[start]
        assert data.sizes[i] == stop - start
        np.testing.assert_array_equal(data.lower[i], chunk.min(axis=0))
        np.testing.assert_array_equal(data.upper[i], chunk.max(axis=0))
        np.testing.assert_allclose(data.mean[i], chunk.mean(axis=0), rtol=1e-12, atol=1e-12)
