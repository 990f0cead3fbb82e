class InvalidInputError(ValueError):
    """Raised when input cannot be turned into a surface.

    The ``stage`` names the part of the pipeline that rejected the input:
    "field validation", "configuration", "interpolation", "convex hull" or "attribution".
    """

    def __init__(self, message, stage="field validation"):
        self.stage = stage
        self.reason = message
        super().__init__(f"[{stage}] {message}")


class ConfigurationWarning(UserWarning):
    """Ambiguous input was resolved using a documented default."""

    pass
