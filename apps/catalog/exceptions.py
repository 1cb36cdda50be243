class PricingEngineError(Exception):
    """Base class for errors raised by the storefront engine."""


class DataInconsistency(PricingEngineError):
    """A complete attribute assignment matches zero or several classifications."""

    def __init__(self, selection, match_count):
        self.selection = selection
        self.match_count = match_count
        super().__init__(
            f"Selection {selection} matches {match_count} classifications, expected exactly one"
        )


class StockExceeded(PricingEngineError):
    """Requested quantity is outside what the classification can supply."""

    def __init__(self, classification_id, requested, available):
        self.classification_id = classification_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Quantity {requested} is not available for classification "
            f"{classification_id} (available: {available})"
        )
