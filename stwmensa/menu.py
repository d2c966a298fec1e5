import asyncio, re
from dataclasses import dataclass
from datetime import date
from logging import getLogger

import aiohttp
from bs4 import BeautifulSoup

from .const import (
    MENU_URL,
    DEFAULT_TIMEOUT,
    FORM_DATE,
    FORM_RESOURCES_ID,
    SEL_GROUP_WRAPPER,
    SEL_GROUP_NAME,
    SEL_MEAL,
    SEL_MEAL_NAME,
    SEL_MEAL_PRICE,
    SEL_MEAL_TAG,
)
from .tags import MealTag, classifyTag, tagSortKey


log = getLogger(__name__)

PRICE_AMOUNT_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


class MenuError(Exception):
    """Base for everything that stops a menu from being produced."""

    message = "could not load menu"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class RequestError(MenuError):
    """The speiseplan endpoint could not be reached or answered with an error."""


class CategoryNameNotFound(MenuError):
    message = "could not find category name"


class MealNameNotFound(MenuError):
    message = "could not find meal name"


class MealPriceNotFound(MenuError):
    message = "could not find meal price"


@dataclass(frozen=True)
class MealPrice:
    """Prices in cents for students, staff and guests."""

    student: int
    medium: int
    expensive: int

    def toJson(self) -> dict:
        return {"student": self.student, "medium": self.medium, "expensive": self.expensive}


@dataclass(frozen=True)
class Meal:
    name: str
    price: MealPrice
    tags: frozenset[MealTag]

    def toJson(self) -> dict:
        return {
            "name": self.name,
            "price": self.price.toJson(),
            "tags": [tag.toJson() for tag in sorted(self.tags, key=tagSortKey)],
        }


@dataclass(frozen=True)
class MealGroup:
    name: str
    meals: tuple[Meal, ...]

    def toJson(self) -> dict:
        return {"name": self.name, "meals": [meal.toJson() for meal in self.meals]}


@dataclass(frozen=True)
class MensaMenu:
    date: date
    groups: tuple[MealGroup, ...]

    def toJson(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "groups": [group.toJson() for group in self.groups],
        }


def textContent(element) -> str:
    # text nodes joined by a space, then every whitespace run collapsed
    return " ".join(" ".join(element.strings).split())


def parsePrice(text: str) -> MealPrice:
    """
    Parse a price line like "Preis 2,50/3,80/4,90" into cents.

    The label before the first space is discarded. Amounts use a decimal
    comma and are separated by "/". Cents are the float product truncated
    toward zero, so 0,29 becomes 28 and not 29.
    """

    _, sep, amounts = text.strip().partition(" ")
    if not sep:
        raise ValueError(f"No label separator in price {text!r}")

    cents = []
    for piece in amounts.replace(",", ".").split("/"):
        if not PRICE_AMOUNT_RE.fullmatch(piece):
            raise ValueError(f"Invalid amount {piece!r} in price {text!r}")
        cents.append(int(float(piece) * 100))

    if len(cents) < 3:
        raise ValueError(f"Expected three amounts in price {text!r}")

    return MealPrice(student=cents[0], medium=cents[1], expensive=cents[2])


def _extractMeal(element) -> Meal:

    nameField = element.select_one(SEL_MEAL_NAME)
    name = textContent(nameField) if nameField is not None else ""
    if not name:
        raise MealNameNotFound()

    tags = frozenset(
        tag for tag in (classifyTag(span.decode_contents()) for span in element.select(SEL_MEAL_TAG))
        if tag is not None
    )

    priceField = element.select_one(SEL_MEAL_PRICE)
    if priceField is None:
        raise MealPriceNotFound()

    priceText = textContent(priceField)
    try:
        price = parsePrice(priceText)
    except ValueError as err:
        log.warning(f"Price has invalid format: {err}")
        raise MealPriceNotFound() from err

    return Meal(name=name, price=price, tags=tags)


def extractMenu(html: str, menuDate: date) -> MensaMenu:
    """
    Build a MensaMenu from a speiseplan page.

    Groups and meals are returned in page order. The first missing element
    or unreadable price aborts the whole menu, there are no partial results.
    The date is not read from the page, it is the one the page was requested for.
    """

    soup = BeautifulSoup(html, "html.parser")

    groups = []
    for wrapper in soup.select(SEL_GROUP_WRAPPER):

        label = wrapper.select_one(SEL_GROUP_NAME)
        if label is None:
            raise CategoryNameNotFound()

        meals = tuple(_extractMeal(meal) for meal in wrapper.select(SEL_MEAL))
        groups.append(MealGroup(name=label.decode_contents(), meals=meals))

    return MensaMenu(date=menuDate, groups=tuple(groups))


class Mensa:

    provider = "stw.berlin"

    def __init__(self, asyncExecutor, url: str = MENU_URL, timeout: float = DEFAULT_TIMEOUT):
        self.asyncExecutor = asyncExecutor
        self.url = self._fixUrl(url)
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    def _fixUrl(self, url) -> str:
        return str(url).strip()

    async def _getPage(self, aiohttp_session, mensaId: str, menuDate: date) -> str:

        form = {
            FORM_DATE: menuDate.isoformat(),
            FORM_RESOURCES_ID: mensaId,
        }

        try:
            async with aiohttp_session.post(self.url, data=form, timeout=self.timeout, raise_for_status=True) as response:
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            log.exception(f"Failed to retrieve {self.url} for mensa {mensaId} on {menuDate}")
            raise RequestError(str(err) or type(err).__name__) from err

    async def loadMenu(self, aiohttp_session, mensaId: str, menuDate: date) -> MensaMenu:

        html = await self._getPage(aiohttp_session, mensaId, menuDate)

        # parsing is cpu bound, keep it off the event loop
        menu = await self.asyncExecutor(extractMenu, html, menuDate)
        log.debug(f"Parsed {len(menu.groups)} groups for mensa {mensaId} on {menuDate}")
        return menu
