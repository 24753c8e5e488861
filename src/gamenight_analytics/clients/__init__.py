"""Round store clients."""

from gamenight_analytics.clients.records import (
    RecordsAPIError,
    RecordsClient,
    load_rounds_file,
    parse_rounds,
)

__all__ = ["RecordsClient", "RecordsAPIError", "load_rounds_file", "parse_rounds"]
