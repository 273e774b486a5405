# dashboard/gateway/types.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from dashboard.exceptions import DashboardError


D = TypeVar("D")


@dataclass
class SubmitResult(Generic[D]):
    """
    Outcome of handing a finished draft to the external API.

    Exactly one of `response` / `error` is meaningful: callers check `ok`
    before reading the response.
    """

    draft: D
    response: Any = None
    error: Optional[DashboardError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CancellationToken:
    """
    Tells a long-running load that whoever asked for it is gone.

    The loader checks `cancelled` after the network call returns and
    drops the result instead of writing it to a torn-down view.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
