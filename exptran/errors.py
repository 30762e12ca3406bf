"""Exception type and abstract interfaces shared across the package."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class ExpTranError(RuntimeError):
    """Error raised by the expression transfer machinery, carrying a message."""


class ErrorFunction(ABC):
    """A scalar objective evaluated on a parameter vector."""

    @abstractmethod
    def __call__(self, params: Sequence[float]) -> float:
        """Return the error for ``params``."""


class ExpTranView(ABC):
    """What a controller needs from the application's main view."""

    @abstractmethod
    def set_all_video_tab_buttons_disabled(self, disabled: bool) -> None:
        """Enable or disable every button on the video tab."""

    @abstractmethod
    def set_all_transfer_tab_buttons_disabled(self, disabled: bool) -> None:
        """Enable or disable every button on the transfer tab."""

    @abstractmethod
    def increment_transfer_progress(self) -> None:
        """Advance the transfer tab's progress indicator by one step."""

    @abstractmethod
    def increment_video_progress(self) -> None:
        """Advance the video tab's progress indicator by one step."""

    @abstractmethod
    def display_exception(self, error: BaseException) -> None:
        """Show ``error`` to the user."""