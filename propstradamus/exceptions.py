"""
Custom exceptions for the prediction cycle.

Every cycle-level failure is terminal: the controller turns it into the
message shown in place of the result card.

Usage:
    from propstradamus.exceptions import FetchError, PropstradamusError

    try:
        result = fetch_and_select(config)
    except FetchError as e:
        print(f"Fetch failed: {e}")
    except PropstradamusError as e:
        print(f"Cycle failed: {e}")
"""

from typing import Optional


class PropstradamusError(Exception):
    """
    Base exception for all prediction cycle errors.

    All custom exceptions inherit from this, allowing:
        except PropstradamusError:
            # Catch any cycle error
    """
    pass


# =============================================================================
# DATA ERRORS
# =============================================================================

class FetchError(PropstradamusError):
    """
    Error retrieving the daily predictions file.

    Raised when:
    - The file does not exist (HTTP 404 or missing on disk)
    - The request fails (network error, timeout)
    """

    def __init__(self, date_str: str, path: str, original_error: Optional[Exception] = None):
        self.date_str = date_str
        self.path = path
        self.original_error = original_error
        super().__init__(
            f"Could not load predictions file for date {date_str}. "
            f"Please ensure the file exists in the predictions folder ({path})."
        )


class ParseError(PropstradamusError):
    """
    The predictions file could not be parsed as CSV.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Error parsing prediction data: {message}")


class EmptyResultError(PropstradamusError):
    """
    The predictions file was fetched and parsed but holds no data rows.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("No prediction data found")


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(PropstradamusError):
    """
    Configuration or setup error.

    Raised when:
    - The config file is missing or unreadable
    - A setting has an invalid value
    """

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Configuration error ({setting}): {message}")
