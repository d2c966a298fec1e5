'''

    Meal tags

    The speiseplan marks every meal with a row of icons. Each icon carries a
    hidden tooltip span whose content is a short code, like:

        <span role="tooltip">vegan</span>
        <span role="tooltip">CO2_bewertung_B</span>

    Codes are mapped to MealTag values through a fixed table. Anything not in
    the table is dropped, so new icons on the site do not break the menu.

'''

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from typing import Union

log = getLogger(__name__)


class Color(Enum):
    GREEN = "Green"
    ORANGE = "Orange"
    RED = "Red"


class SimpleTag(Enum):
    VEGETARIAN = "Vegetarian"
    VEGAN = "Vegan"
    FAIRTRADE = "Fairtrade"
    CLIMATE_FOOD = "ClimateFood"
    SUSTAINABLE_FARMING = "SustainableFarming"
    SUSTAINABLE_FISHING = "SustainableFishing"
    FROZEN = "Frozen"

    def toJson(self):
        return self.value


class Rating(Enum):
    CO2 = "Co2"
    WATER_USAGE = "WaterUsage"
    QUALITY = "Quality"


@dataclass(frozen=True)
class RatedTag:
    """A traffic light rating along one dimension, e.g. Co2(Green)."""

    rating: Rating
    color: Color

    def toJson(self):
        return {self.rating.value: self.color.value}


MealTag = Union[SimpleTag, RatedTag]


TAG_CODES: dict[str, MealTag] = {
    "gruen": RatedTag(Rating.QUALITY, Color.GREEN),
    "gelb": RatedTag(Rating.QUALITY, Color.ORANGE),
    "rot": RatedTag(Rating.QUALITY, Color.RED),
    "vegetarisch": SimpleTag.VEGETARIAN,
    "vegan": SimpleTag.VEGAN,
    "bio": SimpleTag.SUSTAINABLE_FARMING,
    "klima": SimpleTag.CLIMATE_FOOD,
    "msc": SimpleTag.SUSTAINABLE_FISHING,

    "CO2_bewertung_A": RatedTag(Rating.CO2, Color.GREEN),
    "CO2_bewertung_B": RatedTag(Rating.CO2, Color.ORANGE),
    "CO2_bewertung_C": RatedTag(Rating.CO2, Color.RED),

    "H2O_bewertung_A": RatedTag(Rating.WATER_USAGE, Color.GREEN),
    "H2O_bewertung_B": RatedTag(Rating.WATER_USAGE, Color.ORANGE),
    "H2O_bewertung_C": RatedTag(Rating.WATER_USAGE, Color.RED),
}


def classifyTag(code: str) -> MealTag | None:
    tag = TAG_CODES.get(code.strip())
    if tag is None:
        log.debug(f"Ignoring unknown tag code {code.strip()!r}")
    return tag


def tagSortKey(tag: MealTag) -> str:
    # stable json order, sets have none
    value = tag.toJson()
    if isinstance(value, dict):
        (rating, color), = value.items()
        return f"{rating}:{color}"
    return value
