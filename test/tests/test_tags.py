import pytest

from stwmensa.tags import TAG_CODES, Color, RatedTag, Rating, SimpleTag, classifyTag, tagSortKey


EXPECTED = {
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


def test_table_is_exactly_the_known_codes():
    assert TAG_CODES == EXPECTED


@pytest.mark.parametrize("code, tag", EXPECTED.items())
def test_known_codes(code, tag):
    assert classifyTag(code) == tag


def test_surrounding_whitespace_is_ignored():
    assert classifyTag("  vegan\n") == SimpleTag.VEGAN
    assert classifyTag("\tCO2_bewertung_A ") == RatedTag(Rating.CO2, Color.GREEN)


@pytest.mark.parametrize("code", ["", "   ", "Vegan", "VEGAN", "Gruen", "co2_bewertung_a", "CO2_bewertung_D", "fairtrade", "tiefgekuehlt", "veg an"])
def test_unknown_codes_yield_nothing(code):
    assert classifyTag(code) is None


def test_rated_tags_compare_by_value():
    assert RatedTag(Rating.QUALITY, Color.GREEN) == RatedTag(Rating.QUALITY, Color.GREEN)
    assert RatedTag(Rating.QUALITY, Color.GREEN) != RatedTag(Rating.CO2, Color.GREEN)
    assert len({RatedTag(Rating.QUALITY, Color.GREEN), RatedTag(Rating.QUALITY, Color.GREEN), SimpleTag.VEGAN}) == 2


def test_json_form():
    assert SimpleTag.VEGETARIAN.toJson() == "Vegetarian"
    assert SimpleTag.FROZEN.toJson() == "Frozen"
    assert RatedTag(Rating.CO2, Color.GREEN).toJson() == {"Co2": "Green"}
    assert RatedTag(Rating.WATER_USAGE, Color.RED).toJson() == {"WaterUsage": "Red"}
    assert RatedTag(Rating.QUALITY, Color.ORANGE).toJson() == {"Quality": "Orange"}


def test_sort_key_is_stable_across_kinds():
    tags = [RatedTag(Rating.QUALITY, Color.RED), SimpleTag.VEGAN, RatedTag(Rating.CO2, Color.GREEN)]
    assert sorted(tags, key=tagSortKey) == [RatedTag(Rating.CO2, Color.GREEN), RatedTag(Rating.QUALITY, Color.RED), SimpleTag.VEGAN]
