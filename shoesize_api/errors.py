class ConversionError(ValueError):
    """Base class for inputs the conversion engine refuses."""


class InvalidUnitError(ConversionError):
    def __init__(self, unit):
        super().__init__(f"Unknown size unit: {unit!r}")
        self.unit = unit


class InvalidCategoryError(ConversionError):
    def __init__(self, category):
        super().__init__(f"Unknown category: {category!r}")
        self.category = category


class NonFiniteValueError(ConversionError):
    def __init__(self, value):
        super().__init__(f"Size value must be a finite real number, got {value!r}")
        self.value = value
