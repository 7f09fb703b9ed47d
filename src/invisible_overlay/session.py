"""Per-run state record and the top-level process flow with notifications."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .compositor import OutputDocument, ProcessingError, overlay_pdf_bytes
from .export import DEFAULT_SUFFIX, output_name_for, save_output
from .overlay import OverlaySettings

logger = logging.getLogger(__name__)

NOTIFICATION_SECONDS = 6.0

MISSING_INPUT_MESSAGE = "Please paste the text to overlay and select the source PDF."
PROCESSING_FAILED_MESSAGE = "An error occurred while merging the PDFs. Please try again."

SUCCESS = "success"
ERROR = "error"


class InputValidationError(ValueError):
    """Raised when text or source file is missing before processing starts."""


@dataclass
class Notification:
    message: str
    severity: str = SUCCESS
    auto_hide_seconds: float = NOTIFICATION_SECONDS
    created_at: float = field(default_factory=time.monotonic)
    dismissed: bool = False

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def dismiss(self) -> None:
        self.dismissed = True

    def expired(self, now: Optional[float] = None) -> bool:
        """True once dismissed or shown for longer than ``auto_hide_seconds``."""
        if self.dismissed:
            return True
        now = time.monotonic() if now is None else now
        return now - self.created_at >= self.auto_hide_seconds


@dataclass
class OverlaySession:
    """State of one interactive run: entered text, chosen file, output name."""

    text: str = ""
    source_path: Optional[Path] = None
    output_name: str = ""
    output_dir: Optional[Path] = None
    suffix: str = DEFAULT_SUFFIX
    settings: OverlaySettings = field(default_factory=OverlaySettings)
    notification: Optional[Notification] = None

    def select_file(self, path: Path) -> None:
        self.source_path = path
        self.output_name = output_name_for(path.name, self.suffix)

    @property
    def ready(self) -> bool:
        return bool(self.text.strip()) and self.source_path is not None

    @property
    def output_path(self) -> Path:
        if self.source_path is None:
            raise InputValidationError(MISSING_INPUT_MESSAGE)
        directory = self.output_dir if self.output_dir is not None else self.source_path.parent
        return directory / self.output_name

    def validate(self) -> None:
        if not self.ready:
            raise InputValidationError(MISSING_INPUT_MESSAGE)

    def dismiss_notification(self) -> None:
        if self.notification is not None:
            self.notification.dismiss()
            self.notification = None

    async def process(self) -> Notification:
        """Validate, then read, overlay, composite and save one step at a time.

        Failures never propagate: they become an error notification and the
        entered text, chosen file and output name are left as they were.
        """
        try:
            self.validate()
        except InputValidationError as exc:
            logger.warning("Processing blocked: %s", exc)
            return self._notify(str(exc), ERROR)

        source_path = self.source_path
        target = self.output_path
        try:
            data = await asyncio.to_thread(source_path.read_bytes)
            result: OutputDocument = await asyncio.to_thread(overlay_pdf_bytes, data, self.text, self.settings)
            await asyncio.to_thread(save_output, result.data, target)
        except (ProcessingError, OSError) as exc:
            logger.exception("Error merging PDFs for %s: %s", source_path, exc)
            return self._notify(PROCESSING_FAILED_MESSAGE, ERROR)

        logger.info("Wrote %s (%d page(s))", target, result.page_count)
        return self._notify(f"Modified PDF saved as {self.output_name}", SUCCESS)

    def _notify(self, message: str, severity: str) -> Notification:
        self.notification = Notification(message=message, severity=severity)
        return self.notification
