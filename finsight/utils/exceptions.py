class FinanceCalculationError(ValueError):
    """Raised when a calculation is handed input it cannot produce a consistent result for."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidAmountError(FinanceCalculationError):
    pass


class UnknownFrequencyError(FinanceCalculationError):
    pass


class InvalidDistributionError(FinanceCalculationError):
    pass
