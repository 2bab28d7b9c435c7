import pytest

from gridframe.dataframe import Series
from gridframe.forecast.base import InsufficientDataPointsError, forecast
from gridframe.forecast.evaluation import root_mean_squared_error
from gridframe.forecast.hw import HoltWinters, HoltWintersConfig, SeasonalMethod

DATA = [
    30, 21, 29, 31, 40, 48, 53, 47, 37, 39, 31, 29, 17, 9, 20, 24, 27, 35, 41, 38,
    27, 31, 27, 26, 21, 13, 21, 18, 33, 35, 40, 36, 22, 24, 21, 20, 17, 14, 17, 19,
    26, 29, 40, 31, 20, 24, 18, 26, 17, 9, 17, 21, 28, 32, 46, 33, 23, 28, 22, 27,
    18, 8, 17, 21, 31, 34, 44, 38, 31, 30, 26, 32, 45, 34, 30, 27, 25, 22, 28, 33, 42, 32, 40, 52,
]

EXPECTED = [
    26.27699081580312, 12.48133856351768, 22.077813893501844, 26.839391481818982, 31.600180075780813, 30.48212275836478,
    41.83687016138987, 44.46400992890207, 32.183690818478226, 27.244288540553175, 28.104940474424172, 33.28718444078283,
    25.754987449064725, 11.95933519677928, 21.555810526763448, 26.317388115080583, 31.078176709042417, 29.960119391626378,
    41.31486679465147, 43.94200656216367, 31.66168745173983, 26.722285173814775, 27.582937107685776, 32.76518107404443,
]

EXPECTED_RMSE = 12.666953719779478


def _config(**overrides):
    params = dict(alpha=0.716, beta=0.029, gamma=0.993, period=12,
                  seasonal_method=SeasonalMethod.ADDITIVE)
    params.update(overrides)
    return HoltWintersConfig(**params)


def _model(**overrides):
    model = HoltWinters()
    model.configure(_config(**overrides))
    return model


def test_holt_winters_prediction_and_rmse():
    model = _model()
    model.load(Series("simple data", DATA), end=71)
    predictions, confidence = model.predict(24)
    assert predictions == pytest.approx(EXPECTED, rel=1e-12)
    assert confidence is None
    error = model.evaluate(predictions, root_mean_squared_error)
    assert error == pytest.approx(EXPECTED_RMSE, rel=1e-12)


def test_forecast_driver_matches_direct_use():
    predictions, confidence, error = forecast(
        DATA, HoltWinters(), _config(), 24, root_mean_squared_error, end=71
    )
    assert predictions == pytest.approx(EXPECTED, rel=1e-12)
    assert confidence is None
    assert error == pytest.approx(EXPECTED_RMSE, rel=1e-12)


@pytest.mark.parametrize("overrides", [
    {"alpha": 1.5}, {"beta": -0.1}, {"gamma": 2.0}, {"period": 2},
    {"confidence_levels": (1.0,)}, {"confidence_levels": (0.0,)},
])
def test_invalid_config(overrides):
    with pytest.raises(ValueError):
        _config(**overrides).validate()
    with pytest.raises(ValueError):
        HoltWinters().configure(_config(**overrides))


def test_configure_rejects_wrong_type():
    with pytest.raises(TypeError):
        HoltWinters().configure({"alpha": 0.5})


def test_load_requires_enough_points():
    with pytest.raises(InsufficientDataPointsError):
        _model().load(DATA[:17])


def test_load_rejects_missing_values():
    data = list(DATA[:72])
    data[10] = None
    with pytest.raises(InsufficientDataPointsError):
        _model().load(data)


def test_load_rejects_empty_data():
    with pytest.raises(InsufficientDataPointsError):
        _model().load([])


def test_predict_before_load():
    with pytest.raises(RuntimeError):
        _model().predict(3)


def test_evaluate_without_validation_set_is_zero():
    model = _model()
    model.load(DATA[:72])
    predictions, _ = model.predict(12)
    assert model.evaluate(predictions, root_mean_squared_error) == 0.0


def test_evaluate_requires_function():
    model = _model()
    model.load(DATA, end=71)
    predictions, _ = model.predict(4)
    with pytest.raises(ValueError):
        model.evaluate(predictions, None)


def test_confidence_intervals_surround_prediction():
    model = _model(confidence_levels=(0.95, 0.8))
    model.load(DATA, end=71)
    predictions, confidence = model.predict(6)
    assert len(confidence) == 6
    for value, intervals in zip(predictions, confidence):
        assert set(intervals) == {0.95, 0.8}
        for ci in intervals.values():
            assert ci.normal_error() > 0
            assert (ci.lower + ci.upper) / 2 == pytest.approx(value)
        assert intervals[0.95].normal_error() > intervals[0.8].normal_error()


def test_zero_horizon():
    model = _model(confidence_levels=(0.95,))
    model.load(DATA, end=71)
    assert model.predict(0) == ([], [])
    plain = _model()
    plain.load(DATA, end=71)
    assert plain.predict(0) == ([], None)


def test_multiplicative_repeats_seasonal_shape():
    model = _model(seasonal_method=SeasonalMethod.MULTIPLICATIVE, gamma=0.3)
    model.load(DATA, end=71)
    predictions, _ = model.predict(24)
    assert len(predictions) == 24
    assert all(p > 0 for p in predictions)
    # The same seasonal index is applied one period apart.
    peak = max(range(12), key=lambda i: predictions[i])
    assert max(range(12, 24), key=lambda i: predictions[i]) == peak + 12