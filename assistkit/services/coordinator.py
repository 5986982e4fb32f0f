"""Variant generation coordinator.

Runs one generation call per variant concurrently on the event loop and owns
the slot table that records each variant's status and result. All slot
mutations happen on the loop thread, so no locking is needed.

Every issued call is tagged with its slot's epoch. A regeneration bumps the
epoch, which turns any earlier call for that slot into a stale call whose
completion is dropped instead of overwriting the newer state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from assistkit.errors import UnknownVariantError
from assistkit.models.variant import GenerationSlot, SlotStatus, VariantSpec

logger = logging.getLogger(__name__)

# generate(source_text, prompt_modifier) -> generated text; raises on failure.
GenerateFn = Callable[[str, str], Awaitable[str]]
SettledListener = Callable[[VariantSpec, GenerationSlot], None]


@dataclass(frozen=True)
class GenerationFailure:
    """Failure outcome of a single generation call."""

    message: str


Outcome = str | GenerationFailure


class VariantCoordinator:
    """Fans out generation calls for a fixed set of variants of one input text."""

    def __init__(
        self,
        source_text: str,
        specs: Sequence[VariantSpec],
        generate: GenerateFn,
        timeout: float | None = None,
        on_settled: SettledListener | None = None,
    ):
        if not source_text.strip():
            raise ValueError("source_text must not be empty")
        ids = [spec.id for spec in specs]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate variant ids: {ids}")

        self.source_text = source_text
        self._specs: dict[str, VariantSpec] = {spec.id: spec for spec in specs}
        self._slots: dict[str, GenerationSlot] = {spec.id: GenerationSlot() for spec in specs}
        self._generate = generate
        self._timeout = timeout
        self._on_settled = on_settled
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def specs(self) -> list[VariantSpec]:
        return list(self._specs.values())

    @property
    def closed(self) -> bool:
        return self._closed

    def spec(self, variant_id: str) -> VariantSpec:
        try:
            return self._specs[variant_id]
        except KeyError:
            raise UnknownVariantError(variant_id) from None

    def start_all(self) -> list[str]:
        """Start every idle variant. Returns the ids that were started.

        Slots that are pending or already settled are left untouched, so
        calling this repeatedly never issues duplicate calls.
        """
        self._ensure_open()
        started = []
        for variant_id, slot in self._slots.items():
            if slot.status == SlotStatus.IDLE:
                self._issue(variant_id)
                started.append(variant_id)
        return started

    def regenerate(self, variant_id: str, force: bool = True) -> bool:
        """Discard a variant's slot content and issue a fresh call for it.

        With ``force=False`` this only starts the variant when nothing is in
        flight or stored for it (idle or failed). Returns True when a call was
        issued.
        """
        self._ensure_open()
        self.spec(variant_id)
        slot = self._slots[variant_id]
        if not force and slot.status in (SlotStatus.PENDING, SlotStatus.DONE):
            return False

        slot.status = SlotStatus.IDLE
        slot.result = None
        slot.error = None
        self._issue(variant_id)
        return True

    def on_result(self, variant_id: str, epoch: int, outcome: Outcome) -> bool:
        """Apply a call's outcome to its slot. Returns False for stale outcomes."""
        slot = self._slots.get(variant_id)
        if slot is None or self._closed:
            return False
        if slot.status != SlotStatus.PENDING or slot.epoch != epoch:
            logger.debug(
                f"Dropping stale outcome for {variant_id} (epoch {epoch}, current {slot.epoch}, {slot.status.value})"
            )
            return False

        if isinstance(outcome, GenerationFailure):
            slot.status = SlotStatus.FAILED
            slot.result = None
            slot.error = outcome.message
        else:
            slot.status = SlotStatus.DONE
            slot.result = outcome
            slot.error = None

        if self._on_settled is not None:
            try:
                self._on_settled(self._specs[variant_id], slot.model_copy())
            except Exception as e:
                logger.error(f"Settled listener failed for {variant_id}: {e}")
        return True

    def slot(self, variant_id: str) -> GenerationSlot:
        self.spec(variant_id)
        return self._slots[variant_id].model_copy()

    def snapshot(self) -> dict[str, GenerationSlot]:
        """Return a copy of the slot table in variant order."""
        return {variant_id: slot.model_copy() for variant_id, slot in self._slots.items()}

    async def wait(self) -> None:
        """Wait until no generation call is running."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel outstanding calls. Nothing is written to the slots afterwards."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Coordinator has been closed")

    def _issue(self, variant_id: str) -> None:
        loop = asyncio.get_running_loop()
        slot = self._slots[variant_id]
        slot.status = SlotStatus.PENDING
        slot.epoch += 1
        modifier = self._specs[variant_id].prompt_modifier

        task = loop.create_task(
            self._run(variant_id, slot.epoch, modifier),
            name=f"generate-{variant_id}-{slot.epoch}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(f"Started generation for {variant_id} (epoch {slot.epoch})")

    async def _run(self, variant_id: str, epoch: int, modifier: str) -> None:
        # A timeout of None never expires.
        deadline = asyncio.timeout(self._timeout)
        try:
            async with deadline:
                text = await self._generate(self.source_text, modifier)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if isinstance(e, TimeoutError) and deadline.expired():
                message = f"Generation timed out after {self._timeout:g}s"
            else:
                message = str(e) or type(e).__name__
            logger.error(f"Generation failed for {variant_id}: {message}")
            self.on_result(variant_id, epoch, GenerationFailure(message))
        else:
            self.on_result(variant_id, epoch, text)
