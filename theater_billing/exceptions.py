"""
Custom exceptions for theater billing
"""


class BillingError(Exception):
    """Base exception for all billing errors"""
    pass


class UnknownPlayTypeError(BillingError):
    """Raised when a play's type is not one of the priced genres"""

    def __init__(self, play_type: str):
        super().__init__(f"unknown type: {play_type}")
        self.play_type = play_type


class PlayNotFoundError(BillingError):
    """Raised when a performance references a play missing from the catalog"""

    def __init__(self, play_id: str):
        super().__init__(f"play not found: {play_id}")
        self.play_id = play_id


class ConfigurationError(BillingError):
    """Raised when billing configuration is invalid"""
    pass


UnrecognizedPlayGenreError = UnknownPlayTypeError
MissingPlayReferenceError = PlayNotFoundError
