"""Tests for species_sim.environment — resource pool, habitats, temperature."""

import threading

import numpy as np
import pytest

from species_sim.environment import (
    Environment,
    Habitat,
    monthly_temperature,
    season_for_month,
)


@pytest.fixture
def plains():
    return Habitat(
        name="plains",
        monthly_food=100,
        monthly_water=150,
        average_temperature={'summer': 85, 'spring': 60, 'fall': 50, 'winter': 30},
    )


# ── Resource pool ─────────────────────────────────────────────────────

class TestProvide:
    def test_grant_decrements(self):
        env = Environment(food=10, water=10)
        assert env.provide_food(3)
        assert env.food == 7
        assert env.provide_water(10)
        assert env.water == 0

    def test_denied_leaves_pool_untouched(self):
        env = Environment(food=2, water=2)
        assert not env.provide_food(3)
        assert env.food == 2
        assert not env.provide_water(3)
        assert env.water == 2

    def test_second_request_exceeding_pool_denied(self):
        env = Environment(food=5, water=5)
        assert env.provide_food(3)
        assert not env.provide_food(3)
        assert env.food == 2
        assert env.provide_water(4)
        assert not env.provide_water(2)
        assert env.water == 1

    def test_zero_request_always_granted(self):
        env = Environment(food=0, water=0)
        assert env.provide_food(0)
        assert env.provide_water(0)

    def test_negative_request_rejected(self):
        env = Environment(food=5, water=5)
        with pytest.raises(ValueError):
            env.provide_food(-1)
        with pytest.raises(ValueError):
            env.provide_water(-1)

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            Environment(food=-1, water=0)

    def test_concurrent_requests_never_overallocate(self):
        env = Environment(food=100, water=100)
        granted = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                ok = env.provide_food(1)
                with lock:
                    granted.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(granted) == 100
        assert env.food == 0


class TestReset:
    def test_refills_to_capacity(self):
        env = Environment(food=10, water=20, temperature=15.0)
        env.provide_food(10)
        env.provide_water(5)
        env.reset()
        assert env.food == 10
        assert env.water == 20
        assert env.temperature == 15.0

    def test_sets_temperature(self):
        env = Environment(food=1, water=1, temperature=15.0)
        env.reset(temperature=-3.5)
        assert env.temperature == -3.5

    def test_from_habitat(self, plains):
        env = Environment.from_habitat(plains)
        assert env.food == 100
        assert env.water == 150
        assert env.temperature == 30.0   # January → winter


# ── Habitat & seasons ─────────────────────────────────────────────────

class TestSeasons:
    @pytest.mark.parametrize("month, season", [
        (0, 'winter'), (1, 'winter'), (2, 'spring'), (4, 'spring'),
        (5, 'summer'), (7, 'summer'), (8, 'fall'), (10, 'fall'),
        (11, 'winter'), (12, 'winter'), (17, 'summer'),
    ])
    def test_season_for_month(self, month, season):
        assert season_for_month(month) == season

    def test_seasonal_mean(self, plains):
        assert plains.seasonal_mean(6) == 85.0
        assert plains.seasonal_mean(9) == 50.0

    def test_missing_season_rejected(self):
        with pytest.raises(ValueError, match="winter"):
            Habitat(name="bad", monthly_food=1, monthly_water=1,
                    average_temperature={'summer': 1, 'spring': 1, 'fall': 1})

    def test_negative_supply_rejected(self):
        with pytest.raises(ValueError):
            Habitat(name="bad", monthly_food=-5, monthly_water=1,
                    average_temperature={'summer': 1, 'spring': 1,
                                         'fall': 1, 'winter': 1})


class TestMonthlyTemperature:
    def test_within_usual_band(self, plains):
        rng = np.random.default_rng(42)
        temps = [monthly_temperature(plains, 6, rng, extreme_chance=0.0)
                 for _ in range(500)]
        assert min(temps) >= 80.0
        assert max(temps) <= 90.0

    def test_no_fluctuation(self, plains):
        rng = np.random.default_rng(1)
        assert monthly_temperature(plains, 0, rng, fluctuation=0.0,
                                   extreme_chance=0.0) == 30.0

    def test_extreme_months_widen_band(self, plains):
        rng = np.random.default_rng(7)
        temps = np.array([monthly_temperature(plains, 6, rng, extreme_chance=1.0)
                          for _ in range(500)])
        assert temps.min() >= 70.0
        assert temps.max() <= 100.0
        assert np.any(np.abs(temps - 85.0) > 5.0)

    def test_reproducible(self, plains):
        a = [monthly_temperature(plains, m, np.random.default_rng(3)) for m in range(12)]
        b = [monthly_temperature(plains, m, np.random.default_rng(3)) for m in range(12)]
        assert a == b
