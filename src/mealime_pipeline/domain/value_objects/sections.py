from mealime_pipeline.domain.value_objects.category_id import CategoryId

# Section ids as used by the grocery list front-end
MEALIME_SECTIONS: dict[str, CategoryId] = {
    "Produce": CategoryId(1),
    "Meat & Seafood": CategoryId(2),
    "Dairy & Eggs": CategoryId(3),
    "Bakery": CategoryId(4),
    "Pantry": CategoryId(5),
    "Spices & Seasonings": CategoryId(6),
    "Frozen": CategoryId(7),
    "Beverages": CategoryId(8),
    "Household": CategoryId(9),
    "Other": CategoryId(10),
}

DEFAULT_SECTION = MEALIME_SECTIONS["Other"]


def section_name(section: CategoryId) -> str:
    return next((name for name, sid in MEALIME_SECTIONS.items() if sid == section), "undefined")
