# rx_companion/services/prescription_pipeline.py
"""
Prescription scanning workflow: photo -> OCR service -> normalized record.

One pipeline instance backs one scanner screen. It holds the photo the user
picked so "try again" does not ask for it twice, runs at most one extraction
call at a time, and publishes an immutable PipelineState after every step:

    IDLE -> PREVIEWING -> PROCESSING -> SUCCEEDED | FAILED

reset() is accepted in every state. If it lands while a call is in flight the
call still finishes, but its result is dropped.
"""
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from rx_companion.core.errors import InvalidInputError, PrescriptionError
from rx_companion.schemas.prescription import NormalizedPrescription, SourceImage
from rx_companion.services.extraction_client import ExtractionClient
from rx_companion.services.intake import acquire
from rx_companion.services.normalization import normalize_prescription

logger = logging.getLogger(__name__)

PipelineStatus = Literal["IDLE", "PREVIEWING", "PROCESSING", "SUCCEEDED", "FAILED"]


class PipelineState(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: PipelineStatus = "IDLE"
    image: Optional[SourceImage] = None
    result: Optional[NormalizedPrescription] = None
    error: Optional[PrescriptionError] = None

    @property
    def processing(self) -> bool:
        return self.status == "PROCESSING"

    @property
    def can_retry(self) -> bool:
        return (
            self.status == "FAILED"
            and self.image is not None
            and self.error is not None
            and self.error.retryable
        )


Listener = Callable[[PipelineState], None]
CommitHandler = Callable[[NormalizedPrescription], Any]


class PrescriptionPipeline:
    def __init__(
        self,
        client: Optional[ExtractionClient] = None,
        on_commit: Optional[CommitHandler] = None,
    ):
        self.client = client or ExtractionClient()
        self.on_commit = on_commit
        self._state = PipelineState()
        self._processing = False
        # bumped by reset(); results of older attempts are discarded
        self._generation = 0
        self._listeners: List[Listener] = []

    # ---------------------------
    # State
    # ---------------------------
    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def processing(self) -> bool:
        return self._processing

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **fields: Any) -> None:
        self._state = PipelineState(**fields)
        logger.debug("pipeline -> %s", self._state.status)
        for listener in list(self._listeners):
            listener(self._state)

    @contextmanager
    def _in_flight(self) -> Iterator[int]:
        self._processing = True
        generation = self._generation
        try:
            yield generation
        finally:
            # a reset() during the call already released the flag
            if generation == self._generation:
                self._processing = False
                if self._state.status == "PROCESSING":
                    # left by an exception we do not handle; back to the preview
                    self._set_state(status="PREVIEWING", image=self._state.image)

    # ---------------------------
    # Operations
    # ---------------------------
    def load_image(self, file_handle: Any) -> Optional[SourceImage]:
        """Stage 1. A bad file leaves the pipeline FAILED with no image kept."""
        try:
            image = acquire(file_handle)
        except InvalidInputError as e:
            logger.info("Rejected selected file: %s", e.kind)
            self._set_state(status="FAILED", error=e)
            return None

        self._set_state(status="PREVIEWING", image=image)
        return image

    def extract(self) -> Optional[NormalizedPrescription]:
        """
        Stages 2 and 3 on the retained image. Returns the normalized record, or
        None when the call failed, was rejected, or was abandoned by reset().
        """
        if self._processing:
            logger.info("Extraction already in progress; ignoring resubmission.")
            return None

        image = self._state.image
        if image is None:
            logger.info("No image loaded; nothing to extract.")
            return None

        with self._in_flight() as generation:
            self._set_state(status="PROCESSING", image=image)
            try:
                raw = self.client.extract(image)
            except PrescriptionError as e:
                if generation != self._generation:
                    logger.info("Dropping failure of an abandoned extraction.")
                    return None
                logger.warning("Prescription extraction failed: %s", e.message)
                self._set_state(status="FAILED", image=image, error=e)
                return None

            if generation != self._generation:
                logger.info("Dropping result of an abandoned extraction.")
                return None

            result = normalize_prescription(raw)
            self._set_state(status="SUCCEEDED", image=image, result=result)
            return result

    def retry(self) -> Optional[NormalizedPrescription]:
        """User-initiated single attempt; reuses the photo picked earlier."""
        return self.extract()

    def scan(self, file_handle: Any) -> Optional[NormalizedPrescription]:
        """Pick a photo and extract right away, like the scanner screen does."""
        if self._processing:
            logger.info("Extraction already in progress; ignoring new photo.")
            return None
        if self.load_image(file_handle) is None:
            return None
        return self.extract()

    def commit(self, edited: Optional[NormalizedPrescription] = None) -> Any:
        """Hand the (possibly user-edited) record to the medicine list, then reset."""
        if self._state.status != "SUCCEEDED" or self._state.result is None:
            raise RuntimeError("Nothing to save: no successful scan.")
        record = edited or self._state.result
        out = self.on_commit(record) if self.on_commit else record
        self.reset()
        return out

    def reset(self) -> None:
        self._generation += 1
        self._processing = False
        self._set_state(status="IDLE")
