class InvalidParameter(ValueError):
    """A period or identifier query parameter could not be parsed."""

    def __init__(self, name, value, reason="must be an integer"):
        self.name = name
        self.value = value
        super().__init__(f"Invalid '{name}' parameter {value!r}: {reason}")
