import math
from collections.abc import Iterable

import numpy as np
import pytest

from rvgen.distributions import ArityError, DomainError
from rvgen.sampling import GENERATORS, ConvergenceError, generate, generators
from rvgen.sources import NumpySource


class _ScriptedSource:
    """Replay fixed uniform and normal draws, counting what was consumed."""

    def __init__(
        self,
        uniforms: Iterable[float] = (),
        normals: Iterable[float] = (),
        *,
        repeat: bool = False,
    ) -> None:
        self._uniforms = list(uniforms)
        self._normals = list(normals)
        self._repeat = repeat
        self.uniform_calls = 0
        self.normal_calls = 0

    def _next(self, values: list[float], index: int, kind: str) -> float:
        if self._repeat and values:
            return values[index % len(values)]
        if index >= len(values):
            raise AssertionError(f"unexpected {kind} draw #{index + 1}")
        return values[index]

    def uniform(self) -> float:
        value = self._next(self._uniforms, self.uniform_calls, "uniform")
        self.uniform_calls += 1
        return value

    def standard_normal(self) -> float:
        value = self._next(self._normals, self.normal_calls, "normal")
        self.normal_calls += 1
        return value


def test_bernoulli_tie_goes_to_zero() -> None:
    assert generators.bernoulli([0.5], _ScriptedSource([0.3])) == 0.0
    assert generators.bernoulli([0.5], _ScriptedSource([0.5])) == 0.0
    assert generators.bernoulli([0.5], _ScriptedSource([0.7])) == 1.0


def test_exponential_inverse_cdf() -> None:
    value = generators.exponential([1.0], _ScriptedSource([0.5]))
    assert value == pytest.approx(-math.log(0.5))
    assert value == pytest.approx(0.6931, abs=1e-4)


def test_weibull_at_inverse_e_is_scale() -> None:
    value = generators.weibull([1.0, 1.0], _ScriptedSource([math.exp(-1.0)]))
    assert value == pytest.approx(1.0, abs=1e-12)
    assert generators.weibull([2.5, 3.0], _ScriptedSource([math.exp(-1.0)])) == pytest.approx(2.5)


def test_binomial_with_zero_probability_is_zero() -> None:
    source = _ScriptedSource([0.999999, 0.5, 0.000001])
    assert generators.binomial([3, 0.0], source) == 0.0
    assert source.uniform_calls == 3


def test_binomial_counts_successes_in_n_then_p_order() -> None:
    source = _ScriptedSource([0.9, 0.1, 0.8, 0.2])
    assert generators.binomial([4, 0.5], source) == 2.0


def test_triangular_minimum_at_zero_draw() -> None:
    assert generators.triangular([0, 2, 1], _ScriptedSource([0.0])) == 0.0


def test_triangular_branches() -> None:
    # h = 0.25 for (1, 5, 2)
    left = generators.triangular([1, 5, 2], _ScriptedSource([0.1]))
    assert left == pytest.approx(1 + math.sqrt(0.1 * 4 * 1))
    right = generators.triangular([1, 5, 2], _ScriptedSource([0.75]))
    assert right == pytest.approx(5 - math.sqrt(0.25 * 4 * 3))


def test_triangular_degenerate_interval_returns_point() -> None:
    source = _ScriptedSource([0.4])
    assert generators.triangular([3, 3, 3], source) == 3.0
    assert source.uniform_calls == 1


def test_geometric_floor_of_log_ratio() -> None:
    assert generators.geometric([0.5], _ScriptedSource([0.2])) == 2.0
    assert generators.geometric([0.5], _ScriptedSource([0.9])) == 0.0


def test_geometric_certain_success_consumes_draw() -> None:
    source = _ScriptedSource([0.3])
    assert generators.geometric([1.0], source) == 0.0
    assert source.uniform_calls == 1


def test_normal_box_muller_cosine_branch() -> None:
    source = _ScriptedSource([math.exp(-0.5), 0.0])
    assert generators.normal([2.0, 3.0], source) == pytest.approx(5.0)
    source = _ScriptedSource([math.exp(-0.5), 0.5])
    assert generators.normal([2.0, 3.0], source) == pytest.approx(-1.0)


def test_normal_consumes_exactly_two_uniforms() -> None:
    source = _ScriptedSource([0.25, 0.6, 0.9, 0.1])
    generators.normal([0.0, 1.0], source)
    assert source.uniform_calls == 2
    generators.normal([0.0, 1.0], source)
    assert source.uniform_calls == 4
    assert source.normal_calls == 0


def test_poisson_multiplicative_loop() -> None:
    source = _ScriptedSource([0.5, 0.5])
    assert generators.poisson([1.0], source) == 1.0
    assert source.uniform_calls == 2
    assert generators.poisson([1.0], _ScriptedSource([0.2])) == 0.0


def test_gamma_squeeze_acceptance() -> None:
    source = _ScriptedSource([0.5], [0.0])
    assert generators.gamma([2.0, 3.0], source) == pytest.approx(3.0 * (2.0 - 1.0 / 3.0))
    assert (source.normal_calls, source.uniform_calls) == (1, 1)


def test_gamma_rejects_non_positive_cube_without_uniform() -> None:
    source = _ScriptedSource([0.5], [-4.0, 0.0])
    assert generators.gamma([1.0, 1.0], source) == pytest.approx(2.0 / 3.0)
    assert (source.normal_calls, source.uniform_calls) == (2, 1)


def test_gamma_log_test_acceptance() -> None:
    # x = 1 misses the squeeze at u = 0.99 but passes the log test.
    k = 5.0
    d = k - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)
    v = (1.0 + c) ** 3
    assert not 0.99 < 1.0 - 0.0331
    assert math.log(0.99) < 0.5 + d * (1.0 - v + math.log(v))
    value = generators.gamma([k, 1.0], _ScriptedSource([0.99], [1.0]))
    assert value == pytest.approx(d * v)


def test_gamma_shape_below_one_boosts_once() -> None:
    source = _ScriptedSource([0.5, 0.25], [0.0])
    value = generators.gamma([0.5, 2.0], source)
    assert value == pytest.approx(2.0 * (1.5 - 1.0 / 3.0) * 0.25**2)
    assert (source.normal_calls, source.uniform_calls) == (1, 2)


def test_gamma_iteration_cap_raises() -> None:
    source = _ScriptedSource([0.5], [-100.0], repeat=True)
    with pytest.raises(ConvergenceError) as excinfo:
        generators.gamma([2.0, 1.0], source, max_iterations=5)
    assert excinfo.value.iterations == 5
    assert source.normal_calls == 5


def test_poisson_iteration_cap_raises() -> None:
    source = _ScriptedSource([0.999999], repeat=True)
    with pytest.raises(ConvergenceError, match="Poisson"):
        generators.poisson([1.0], source, max_iterations=10)


def test_generate_forwards_cap_only_to_iterative_generators() -> None:
    source = _ScriptedSource([0.5])
    assert generate("Exponential", [1.0], source, max_iterations=1) == pytest.approx(math.log(2))
    source = _ScriptedSource([0.999999], repeat=True)
    with pytest.raises(ConvergenceError):
        generate("POISSON", [1.0], source, max_iterations=3)


@pytest.mark.parametrize(
    "name,params,error",
    [
        ("bernoulli", [1.5], DomainError),
        ("binomial", [1.6, 0.5], DomainError),
        ("gamma", [1.0, 0.0], DomainError),
        ("normal", [0.0, -1.0], DomainError),
        ("poisson", [], ArityError),
        ("triangular", [0, 2], ArityError),
        ("weibull", [1, 1, 1], ArityError),
    ],
)
def test_validation_happens_before_any_draw(name: str, params: list[float], error: type) -> None:
    source = _ScriptedSource()
    with pytest.raises(error):
        GENERATORS[name](params, source)
    assert source.uniform_calls == 0
    assert source.normal_calls == 0


N_DRAWS = 10_000


@pytest.fixture()
def source() -> NumpySource:
    return NumpySource(20240601)


@pytest.mark.parametrize("p", [0.0, 0.25, 0.5, 1.0])
def test_bernoulli_is_binary(source: NumpySource, p: float) -> None:
    values = {generators.bernoulli([p], source) for _ in range(N_DRAWS)}
    assert values <= {0.0, 1.0}
    if p == 0.0:
        assert values == {0.0}


@pytest.mark.parametrize("n,p", [(3, 0.5), (0, 0.5), (10, 1.0), (7, 0.2)])
def test_binomial_is_integer_in_range(source: NumpySource, n: int, p: float) -> None:
    for _ in range(N_DRAWS):
        value = generators.binomial([n, p], source)
        assert value == int(value)
        assert 0 <= value <= n
    if p == 1.0:
        assert generators.binomial([n, p], source) == n


@pytest.mark.parametrize("p", [0.5, 0.05, 1.0])
def test_geometric_is_non_negative_integer(source: NumpySource, p: float) -> None:
    for _ in range(N_DRAWS):
        value = generators.geometric([p], source)
        assert value == int(value)
        assert value >= 0


@pytest.mark.parametrize(
    "name,params",
    [
        ("exponential", [1.0]),
        ("exponential", [0.0001]),
        ("exponential", [1000.0]),
        ("poisson", [0.01]),
        ("poisson", [2.5]),
        ("poisson", [50.0]),
        ("weibull", [0.5, 0.5]),
        ("weibull", [10.0, 10.0]),
        ("weibull", [1.0, 0.0001]),
    ],
)
def test_non_negative_outputs(source: NumpySource, name: str, params: list[float]) -> None:
    draws = 2_000 if name == "poisson" else N_DRAWS
    for _ in range(draws):
        assert GENERATORS[name](params, source) >= 0


@pytest.mark.parametrize(
    "k,theta",
    [(1, 1), (0.5, 1), (2, 1), (1, 0.5), (0.5, 0.5), (2, 2), (1, 0.0001), (0.2, 3), (10, 10)],
)
def test_gamma_is_positive(source: NumpySource, k: float, theta: float) -> None:
    for _ in range(2_000):
        assert generators.gamma([k, theta], source) > 0


def test_gamma_tiny_shape_is_finite(source: NumpySource) -> None:
    # Gamma(0.01) puts ~0.1% of its mass below the smallest double.
    values = [generators.gamma([0.01, 1.0], source) for _ in range(2_000)]
    assert all(math.isfinite(value) and value >= 0 for value in values)
    assert sum(value > 0 for value in values) > 1_900


def test_weibull_tiny_shape_saturates_instead_of_raising() -> None:
    assert generators.weibull([1.0, 0.0001], _ScriptedSource([1e-6])) == math.inf


@pytest.mark.parametrize(
    "a,b,c",
    [(0, 2, 1), (-1, 1, 0), (1, 5, 3), (-10, -1, -5), (0, 2, 0), (0, 2, 2)],
)
def test_triangular_stays_in_support(source: NumpySource, a: float, b: float, c: float) -> None:
    for _ in range(N_DRAWS):
        value = generators.triangular([a, b, c], source)
        assert a <= value <= b


def test_same_source_state_gives_same_draws() -> None:
    first = NumpySource(99)
    second = NumpySource(99)
    for name, params in [("gamma", [0.7, 2.0]), ("poisson", [3.0]), ("normal", [1.0, 2.0])]:
        assert [GENERATORS[name](params, first) for _ in range(50)] == [
            GENERATORS[name](params, second) for _ in range(50)
        ]


def test_generate_uses_fresh_source_by_default() -> None:
    value = generate("normal", [0.0, 1.0])
    assert np.isfinite(value)


def test_geometric_tiny_probability_stays_finite() -> None:
    value = generators.geometric([1e-17], _ScriptedSource([0.5]))
    assert math.isfinite(value)
    assert value == pytest.approx(math.log(2.0) / 1e-17, rel=1e-9)


def test_geometric_small_probability_keeps_precision() -> None:
    value = generators.geometric([1e-12], _ScriptedSource([0.5]))
    assert value == pytest.approx(math.log(2.0) / 1e-12, rel=1e-9)


@pytest.mark.parametrize("u", [0.0, 0.25, 0.5, 0.75, 0.999])
def test_triangular_with_overflowing_width_stays_in_support(u: float) -> None:
    a, b, c = -1e308, 1e308, 0.0
    value = generators.triangular([a, b, c], _ScriptedSource([u]))
    assert math.isfinite(value)
    assert a <= value <= b


def test_generate_keeps_falsy_custom_source() -> None:
    class _EmptyLookingSource(_ScriptedSource):
        def __len__(self) -> int:
            return 0

    source = _EmptyLookingSource([0.5])
    assert generate("exponential", [1.0], source) == pytest.approx(math.log(2.0))
    assert source.uniform_calls == 1
