# engine/exceptions.py

class AnalyticsError(Exception):
    pass


class InsufficientDataError(AnalyticsError):
    def __init__(self, analysis: str, provided: int, required: int) -> None:
        self.analysis = analysis
        self.provided = provided
        self.required = required
        super().__init__(
            f"Insufficient data for {analysis}: {provided} points provided, "
            f"{required} required (minimum {required})"
        )


class InvalidConfigurationError(AnalyticsError):
    pass
