class CategoryId(int):
    """Value Object for a Mealime grocery section id."""
    def __new__(cls, value: int) -> "CategoryId":
        assert int(value) > 0, "Invalid section id"
        return int.__new__(cls, value)
