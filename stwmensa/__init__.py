"""The Stw Mensa integration."""

from .menu import (
    Mensa,
    MensaMenu,
    MealGroup,
    Meal,
    MealPrice,
    MenuError,
    RequestError,
    CategoryNameNotFound,
    MealNameNotFound,
    MealPriceNotFound,
    extractMenu,
    parsePrice,
)
from .tags import Color, MealTag, RatedTag, Rating, SimpleTag, classifyTag
