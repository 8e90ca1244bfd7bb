"""Bundled actuarial life tables."""

from __future__ import annotations

import bisect

from amped.domains.longevity.domain_logic.metric_models import Gender

# WHO Global Health Observatory 2023, remaining years at exact age.
WHO_2023_MALE: dict[int, float] = {
    0: 71.4, 10: 62.1, 20: 52.3, 30: 42.8, 40: 33.5,
    50: 24.7, 60: 16.8, 70: 10.1, 80: 5.5, 90: 3.0,
}
WHO_2023_FEMALE: dict[int, float] = {
    0: 76.8, 10: 67.4, 20: 57.5, 30: 47.7, 40: 38.1,
    50: 28.8, 60: 20.1, 70: 12.5, 80: 6.8, 90: 3.5,
}


class InterpolatedLifeTable:
    """Linear interpolation between tabulated ages, clamped at both ends.

    A missing or undisclosed gender uses the mean of the two tables.
    """

    def __init__(self, male: dict[int, float], female: dict[int, float], name: str = "") -> None:
        if not male or not female:
            raise ValueError("Life table needs at least one age per gender")
        self.name = name
        self._male = sorted(male.items())
        self._female = sorted(female.items())

    @staticmethod
    def _interpolate(rows: list[tuple[int, float]], age: float) -> float:
        ages = [a for a, _ in rows]
        if age <= ages[0]:
            return rows[0][1]
        if age >= ages[-1]:
            return rows[-1][1]
        i = bisect.bisect_right(ages, age)
        (a0, y0), (a1, y1) = rows[i - 1], rows[i]
        return y0 + (y1 - y0) * (age - a0) / (a1 - a0)

    def years_remaining(self, age: float, gender: Gender | None) -> float:
        if gender is Gender.MALE:
            return self._interpolate(self._male, age)
        if gender is Gender.FEMALE:
            return self._interpolate(self._female, age)
        return (
            self._interpolate(self._male, age) + self._interpolate(self._female, age)
        ) / 2.0


LIFE_TABLES = {
    "who_2023": lambda: InterpolatedLifeTable(WHO_2023_MALE, WHO_2023_FEMALE, name="who_2023"),
}


def get_life_table(name: str) -> InterpolatedLifeTable:
    """Build a bundled life table by key."""
    try:
        factory = LIFE_TABLES[name]
    except KeyError:
        raise ValueError(
            f"Unknown life table: {name!r}. Available: {', '.join(sorted(LIFE_TABLES))}"
        ) from None
    return factory()
