from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from mealime_pipeline.domain.value_objects.category_id import CategoryId
from mealime_pipeline.domain.value_objects.sections import DEFAULT_SECTION, MEALIME_SECTIONS

SECTION_KEYWORDS: Mapping[str, Sequence[str]] = {
    "Produce": (
        "apple", "avocado", "banana", "basil", "bell pepper", "berry", "broccoli", "cabbage",
        "carrot", "celery", "cilantro", "cucumber", "garlic", "ginger", "kale", "lemon",
        "lettuce", "lime", "mushroom", "onion", "orange", "parsley", "potato", "scallion",
        "spinach", "tomato", "zucchini", "herb", "fruit", "vegetable",
    ),
    "Meat & Seafood": (
        "bacon", "beef", "chicken", "chorizo", "fish", "ham", "lamb", "pork", "prawn",
        "salmon", "sausage", "shrimp", "steak", "tuna", "turkey", "mince",
    ),
    "Dairy & Eggs": (
        "butter", "cheese", "cream", "egg", "feta", "milk", "mozzarella", "parmesan",
        "yogurt", "yoghurt", "tofu",
    ),
    "Bakery": ("bagel", "baguette", "bread", "bun", "croissant", "pita", "tortilla", "wrap"),
    "Pantry": (
        "beans", "broth", "chickpea", "coconut milk", "flour", "honey", "lentil", "noodle",
        "oats", "oil", "pasta", "peanut butter", "rice", "sauce", "stock", "sugar",
        "vinegar", "canned tomato", "cereal",
    ),
    "Spices & Seasonings": (
        "cinnamon", "cumin", "curry powder", "oregano", "paprika", "pepper", "salt",
        "seasoning", "spice", "thyme", "chili flakes",
    ),
    "Frozen": ("frozen", "ice cream", "peas"),
    "Beverages": ("beer", "coffee", "juice", "soda", "tea", "water", "wine"),
    "Household": (
        "detergent", "dish soap", "foil", "paper towel", "soap", "sponge", "toilet paper",
        "trash bag",
    ),
}


class KeywordSectionClassifier:
    """Maps free text to a Mealime section by keyword.

    The longest matching keyword wins, so "peanut butter" lands in Pantry
    rather than Dairy & Eggs. Unknown items fall back to the default section.
    """

    def __init__(
        self,
        keywords: Mapping[str, Sequence[str]] = SECTION_KEYWORDS,
        sections: Mapping[str, CategoryId] = MEALIME_SECTIONS,
        default: CategoryId = DEFAULT_SECTION,
    ) -> None:
        self._patterns: list[tuple[int, re.Pattern[str], CategoryId]] = []
        for section, words in keywords.items():
            for word in words:
                pattern = re.compile(rf"\b{re.escape(word)}(?:e?s)?\b", re.IGNORECASE)
                self._patterns.append((len(word), pattern, sections[section]))
        self._patterns.sort(key=lambda p: p[0], reverse=True)
        self._default = default

    def category_of(self, text: str) -> CategoryId:
        for _, pattern, section in self._patterns:
            if pattern.search(text):
                return section
        return self._default
