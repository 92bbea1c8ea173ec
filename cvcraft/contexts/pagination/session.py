"""
Pagination Session

Drives re-estimation for one interactive preview:

    IDLE -> SCHEDULED -> MEASURING -> SETTLED
              ^                          |
              +------- update() ---------+

A change of content, style tokens, zoom or marker visibility schedules a new
estimate. Measurement waits one frame plus a settle delay so layout is stable.
Every schedule bumps a generation counter; a result whose generation is no
longer current is discarded, and the superseded task is cancelled, so the last
schedule always wins. A measurement that raises is logged and treated as
unavailable geometry, so the session still settles on estimated heights.
"""

import asyncio
import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from cvcraft.contexts.pagination.estimator import (
    PaginationEstimate,
    PaginationMode,
    estimate_page_breaks,
    pack_sections,
)
from cvcraft.contexts.pagination.height_providers import MeasuredHeightProvider
from cvcraft.contexts.pagination.logger import _log_debug, _log_warning, log_stale_result
from cvcraft.contexts.pagination.page_geometry import PageGeometry
from cvcraft.contexts.rendering.document_data_structures import Frontmatter, Section

FRAME_DELAY = 1 / 60
SETTLE_DELAY = 0.1


class EstimatorState(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    MEASURING = "measuring"
    SETTLED = "settled"


@dataclass
class LayoutMeasurement:
    """
    What the preview surface reports once laid out.

    Attributes:
        content_height: Total content height in screen px
        heights: Per-block heights keyed "header" / "section-{i}", in screen px
    """

    content_height: Optional[float] = None
    heights: Dict[str, float] = field(default_factory=dict)


# Returns None while the surface isn't laid out yet
Measure = Callable[[], Union[Optional[LayoutMeasurement], Awaitable[Optional[LayoutMeasurement]]]]


@dataclass
class PaginationResult:
    """
    One settled estimate.

    Attributes:
        generation: Schedule that produced this result
        mode: Estimator mode used
        break_offsets: Page boundary offsets in px (unzoomed)
        estimate: Page groupings and warnings (section-aware mode only)
        show_markers: Whether the preview should draw the markers
    """

    generation: int
    mode: PaginationMode
    break_offsets: List[float] = field(default_factory=list)
    estimate: Optional[PaginationEstimate] = None
    show_markers: bool = True


class PaginationSession:
    """
    Schedules and settles pagination estimates for one preview.

    Must be used from inside a running event loop.

    Example:
        session = PaginationSession(measure=surface.measure)
        session.update(sections=document.sections, tokens=tokens)
        result = await session.wait_until_settled()
    """

    def __init__(
        self,
        measure: Optional[Measure] = None,
        geometry: Optional[PageGeometry] = None,
        mode: PaginationMode = PaginationMode.SECTION_AWARE,
        frame_delay: float = FRAME_DELAY,
        settle_delay: float = SETTLE_DELAY,
        on_settled: Optional[Callable[[PaginationResult], Any]] = None,
    ):
        self.measure = measure
        self.geometry = geometry or PageGeometry()
        self.mode = PaginationMode(mode)
        self.frame_delay = frame_delay
        self.settle_delay = settle_delay
        self.on_settled = on_settled

        self.state = EstimatorState.IDLE
        self.result: Optional[PaginationResult] = None
        self._generation = 0
        self._inputs: Optional[tuple] = None
        self._sections: List[Section] = []
        self._frontmatter: Optional[Frontmatter] = None
        self._zoom = 1.0
        self._show_markers = True
        self._task: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    def update(
        self,
        sections: List[Section],
        frontmatter: Optional[Frontmatter] = None,
        tokens: Optional[Mapping[str, str]] = None,
        zoom: float = 1.0,
        show_markers: bool = True,
    ) -> Optional[asyncio.Task]:
        """
        Report the current preview inputs; re-schedules only if they changed.

        Returns:
            The scheduled task, or None when nothing changed
        """
        inputs = (
            list(sections),
            frontmatter,
            tuple(sorted((tokens or {}).items())),
            zoom,
            show_markers,
        )
        if inputs == self._inputs:
            return None

        self._inputs = inputs
        self._sections = list(sections)
        self._frontmatter = frontmatter
        self._zoom = zoom or 1.0
        self._show_markers = show_markers
        return self.schedule()

    def schedule(self) -> asyncio.Task:
        """Start a new estimate, superseding any in-flight one."""
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()

        self.state = EstimatorState.SCHEDULED
        _log_debug(f"Scheduled estimate (generation {self._generation})")
        self._task = asyncio.get_running_loop().create_task(self._run(self._generation))
        return self._task

    async def wait_until_settled(self) -> Optional[PaginationResult]:
        """Wait for the latest scheduled estimate (following any re-schedules)."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self.result

    def close(self):
        """Cancel any in-flight estimate and return to IDLE."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.state = EstimatorState.IDLE

    async def _measure(self) -> Optional[LayoutMeasurement]:
        if self.measure is None:
            return None
        measurement = self.measure()
        if inspect.isawaitable(measurement):
            measurement = await measurement
        return measurement

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            log_stale_result(generation, self._generation)
            return True
        return False

    async def _run(self, generation: int) -> Optional[PaginationResult]:
        # One frame for the render pass, then let layout settle
        await asyncio.sleep(self.frame_delay)
        await asyncio.sleep(self.settle_delay)
        if self._is_stale(generation):
            return None

        self.state = EstimatorState.MEASURING
        try:
            measurement = await self._measure()
        except Exception as e:
            _log_warning(f"Layout measurement failed, falling back to estimates: {e}")
            measurement = None
        if self._is_stale(generation):
            return None

        result = self._estimate(generation, measurement)
        self.result = result
        self.state = EstimatorState.SETTLED
        if self.on_settled is not None:
            try:
                self.on_settled(result)
            except Exception as e:
                _log_warning(f"on_settled callback failed for generation {generation}: {e}")
        return result

    def _estimate(self, generation: int, measurement: Optional[LayoutMeasurement]) -> PaginationResult:
        zoom = self._zoom

        if self.mode is PaginationMode.SIMPLE:
            content_height = None
            if measurement is not None and measurement.content_height is not None:
                content_height = measurement.content_height / zoom
            return PaginationResult(
                generation=generation,
                mode=self.mode,
                break_offsets=estimate_page_breaks(content_height, self.geometry),
                show_markers=self._show_markers,
            )

        heights = {}
        if measurement is not None:
            heights = {key: value / zoom for key, value in measurement.heights.items()}
        estimate = pack_sections(
            self._sections,
            MeasuredHeightProvider(heights),
            self.geometry,
            self._frontmatter,
        )

        offsets = []
        running = 0.0
        for page in estimate.pages[:-1]:
            running += page.height
            offsets.append(running)

        return PaginationResult(
            generation=generation,
            mode=self.mode,
            break_offsets=offsets,
            estimate=estimate,
            show_markers=self._show_markers,
        )
