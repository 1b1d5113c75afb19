import numpy as np
import pandas as pd
import pytest

from Difflag import (
    DiffOrder,
    PreconditionViolationError,
    SizeMismatchError,
    UnsupportedOrderError,
    backform,
    diff,
    differ,
    transform_back,
    transform_back_from,
    undiff,
)


def make_trending_series(n=12, seed=3):
    rng = np.random.default_rng(seed)
    return 10.0 + np.cumsum(rng.normal(0.5, 1.0, n))


def test_known_values_first_and_second_difference():
    y = [1, 3, 6, 10]

    assert list(diff(y, 1)) == [2, 3, 4]
    assert list(diff(y, 2)) == [1, 1]
    assert list(undiff([2, 3, 4], 1)) == [1, 3, 6, 10]
    assert list(backform([2, 3, 4], y, 1)) == [1, 3, 6, 10]


def test_diff_zero_is_a_distinct_copy():
    y = np.array([4.0, 2.0, 7.0])

    out = diff(y, 0)
    out[0] = 99.0

    assert y[0] == 4.0
    np.testing.assert_array_equal(diff(y, 0), y)


def test_diff_accepts_pandas_series():
    s = pd.Series([1.0, 3.0, 6.0, 10.0], index=pd.date_range("2024-01-01", periods=4, freq="D"))

    np.testing.assert_array_equal(diff(s), [2.0, 3.0, 4.0])


def test_undiff_inverts_first_difference():
    y = make_trending_series()

    np.testing.assert_allclose(undiff(diff(y, 1), y[0]), y)
    assert differ(y, undiff(diff(y, 1), y[0])) == 0


def test_backform_inverts_second_difference_with_exact_anchors():
    y = make_trending_series()

    yp = backform(diff(y, 2), y, 2)

    assert yp[0] == y[0]
    assert yp[1] == y[1]
    np.testing.assert_allclose(yp, y)


def test_backform_order_zero_returns_predictions():
    vp = [0.5, -1.0, 2.0]

    np.testing.assert_array_equal(backform(vp, [9.0, 9.0, 9.0], 0), vp)


def test_backform_reanchors_to_actuals():
    # each step adds the predicted change to the ACTUAL previous value
    y = [10.0, 12.0, 11.0, 15.0]
    vp = [1.0, 1.0, 1.0]

    np.testing.assert_array_equal(backform(vp, y, 1), [10.0, 11.0, 13.0, 12.0])
    np.testing.assert_array_equal(undiff(vp, y[0]), [10.0, 11.0, 12.0, 13.0])


def test_backform_rejects_too_few_predictions():
    with pytest.raises(SizeMismatchError):
        backform([1.0], [1.0, 2.0, 3.0], 1)


@pytest.mark.parametrize("d", [3, -1, 7])
def test_unsupported_orders_fail(d):
    y = [1.0, 3.0, 6.0, 10.0, 15.0]

    with pytest.raises(UnsupportedOrderError):
        diff(y, d)
    with pytest.raises(UnsupportedOrderError):
        backform([1.0, 1.0], y, d)
    with pytest.raises(UnsupportedOrderError):
        transform_back_from([1.0, 1.0], y, d, 3)


def test_non_integer_order_is_rejected():
    with pytest.raises(UnsupportedOrderError):
        diff([1.0, 2.0, 3.0], 1.5)
    with pytest.raises(UnsupportedOrderError):
        diff([1.0, 2.0, 3.0], True)


def test_unsupported_order_is_a_value_error():
    with pytest.raises(ValueError):
        DiffOrder.coerce(4)
    assert DiffOrder.coerce(np.int64(2)) is DiffOrder.ORDER2


def test_series_shorter_than_order_fails():
    with pytest.raises(PreconditionViolationError):
        diff([1.0, 2.0], 2)
    with pytest.raises(PreconditionViolationError):
        diff([[1.0, 2.0], [3.0, 4.0]], 1)


def test_transform_back_from_first_order_accumulates_from_anchor():
    y = [1.0, 3.0, 6.0, 10.0, 15.0]

    # forecasts made from t=3, anchored to y[2]
    np.testing.assert_array_equal(transform_back_from([4.0, 5.0], y, 1, 3), [10.0, 15.0])


def test_transform_back_from_second_order_uses_two_anchors():
    y = [1.0, 3.0, 6.0, 10.0, 15.0]

    # anchors y[1], y[2]; constant acceleration of 1
    np.testing.assert_array_equal(transform_back_from([1.0, 1.0], y, 2, 3), [10.0, 15.0])


def test_transform_back_from_order_zero_is_identity():
    np.testing.assert_array_equal(transform_back_from([4.0, 5.0], [1.0, 2.0], 0, 1), [4.0, 5.0])


def test_transform_back_from_needs_anchors():
    with pytest.raises(PreconditionViolationError):
        transform_back_from([1.0], [1.0, 2.0, 3.0], 2, 1)


def test_transform_back_matrix_layout():
    y = np.array([1.0, 3.0, 6.0, 10.0])
    v = np.append(diff(y, 1), [0.0, 0.0])
    # actual, two horizons, time index; rows = len(y) + 1
    vf = np.zeros((5, 4))
    vf[:, 1] = v
    vf[:, 2] = v + 1.0
    vf[:, 3] = np.arange(5)

    yf = transform_back(vf, y, 1)

    assert yf.shape == (5, 4)
    np.testing.assert_array_equal(yf[:, 0], [1.0, 3.0, 6.0, 10.0, 0.0])
    np.testing.assert_array_equal(yf[:, 1], [1.0, 3.0, 6.0, 10.0, 10.0])
    np.testing.assert_array_equal(yf[:, 2], [1.0, 4.0, 7.0, 11.0, 11.0])
    np.testing.assert_array_equal(yf[:, 3], np.arange(5))


def test_transform_back_requires_extended_row_count():
    with pytest.raises(SizeMismatchError):
        transform_back(np.zeros((4, 3)), [1.0, 2.0, 3.0, 4.0], 1)
    with pytest.raises(UnsupportedOrderError):
        transform_back(np.zeros((5, 3)), [1.0, 2.0, 3.0, 4.0], 3)


def test_transform_back_second_order_matrix():
    y = np.array([1.0, 3.0, 6.0, 10.0, 15.0])
    vf = np.zeros((6, 3))
    vf[:, 1] = np.append(diff(y, 2), [0.0, 0.0, 0.0])
    vf[:, 2] = np.arange(6)

    yf = transform_back(vf, y, 2)

    np.testing.assert_array_equal(yf[:, 1], [1.0, 3.0, 6.0, 10.0, 15.0, 20.0])


def test_transform_back_from_rejects_time_past_the_end():
    with pytest.raises(PreconditionViolationError):
        transform_back_from([1.0], [1.0, 2.0, 3.0], 1, 4)


def test_transform_back_from_time_point_must_be_an_integer():
    y = [1.0, 3.0, 6.0]
    with pytest.raises(PreconditionViolationError):
        transform_back_from([4.0, 5.0], y, 1, 3.0)

    np.testing.assert_array_equal(transform_back_from([4.0, 5.0], y, 1, np.int64(3)), [10.0, 15.0])
