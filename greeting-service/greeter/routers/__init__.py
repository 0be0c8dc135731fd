"""Request dispatch.

This module contains the Dispatcher, which runs the ordered handler chain
and maps unmatched requests to 404 and failed handlers to 500.
"""

from greeter.routers.dispatcher import (
    Dispatcher,
    internal_error_response,
    not_found,
    not_found_response,
)

__all__ = [
    "Dispatcher",
    "internal_error_response",
    "not_found",
    "not_found_response",
]
