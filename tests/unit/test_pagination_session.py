"""Unit tests for the pagination session scheduler."""

import asyncio

import pytest

from cvcraft.contexts.pagination.estimator import PaginationMode
from cvcraft.contexts.pagination.page_geometry import PageGeometry
from cvcraft.contexts.pagination.session import (
    EstimatorState,
    LayoutMeasurement,
    PaginationSession,
)
from cvcraft.contexts.rendering.document_data_structures import Section, TextContent

USABLE = PageGeometry().usable_height_px


def sections(*titles):
    return [Section(type="paragraph", title=title, content=TextContent(paragraphs=["x"])) for title in titles]


def make_session(measure=None, **kwargs):
    return PaginationSession(measure=measure, frame_delay=0, settle_delay=0, **kwargs)


@pytest.mark.unit
def test_settles_with_measured_heights():
    measurement = LayoutMeasurement(heights={"header": 0.0, "section-0": USABLE * 0.6, "section-1": USABLE * 0.6})

    async def scenario():
        session = make_session(lambda: measurement)
        session.update(sections("One", "Two"))
        assert session.state is EstimatorState.SCHEDULED
        result = await session.wait_until_settled()
        return session, result

    session, result = asyncio.run(scenario())

    assert session.state is EstimatorState.SETTLED
    assert result.generation == 1
    assert result.mode is PaginationMode.SECTION_AWARE
    assert result.estimate.page_count == 2
    assert result.break_offsets == pytest.approx([USABLE * 0.6])


@pytest.mark.unit
def test_async_measure_is_awaited():
    async def measure():
        return LayoutMeasurement(heights={"header": 0.0, "section-0": 10.0})

    async def scenario():
        session = make_session(measure)
        session.update(sections("One"))
        return await session.wait_until_settled()

    result = asyncio.run(scenario())
    assert result.estimate.pages[0].height == 10.0


@pytest.mark.unit
def test_unchanged_inputs_do_not_reschedule():
    async def scenario():
        session = make_session()
        first = session.update(sections("One"), tokens={"--primary-color": "#000"})
        second = session.update(sections("One"), tokens={"--primary-color": "#000"})
        third = session.update(sections("One"), tokens={"--primary-color": "#fff"})
        await session.wait_until_settled()
        return session, first, second, third

    session, first, second, third = asyncio.run(scenario())
    assert first is not None
    assert second is None
    assert third is not None
    assert session.generation == 2


@pytest.mark.unit
def test_last_schedule_wins():
    settled = []

    async def scenario():
        session = make_session(on_settled=settled.append)
        session.update(sections("One"))
        session.update(sections("One", "Two"))
        return await session.wait_until_settled()

    result = asyncio.run(scenario())
    assert result.generation == 2
    assert [r.generation for r in settled] == [2]
    assert result.estimate.pages[0].sections[1].title == "Two"


@pytest.mark.unit
def test_stale_measurement_is_discarded():
    """Test a re-schedule during measurement drops the in-flight result."""
    settled = []
    holder = {}

    def measure():
        session = holder["session"]
        if session.generation == 1:
            session.update(sections("Edited"))
        return LayoutMeasurement()

    async def scenario():
        session = make_session(measure, on_settled=settled.append)
        holder["session"] = session
        session.update(sections("Original"))
        return await session.wait_until_settled()

    result = asyncio.run(scenario())
    assert [r.generation for r in settled] == [2]
    assert result.estimate.pages[0].sections[0].title == "Edited"


@pytest.mark.unit
def test_measured_heights_are_divided_by_zoom():
    measurement = LayoutMeasurement(heights={"header": 200.0, "section-0": 400.0})

    async def scenario():
        session = make_session(lambda: measurement)
        session.update(sections("One"), zoom=2.0)
        return await session.wait_until_settled()

    result = asyncio.run(scenario())
    assert result.estimate.pages[0].height == 300.0


@pytest.mark.unit
def test_simple_mode():
    async def scenario(measurement):
        session = make_session(lambda: measurement, mode=PaginationMode.SIMPLE)
        session.update(sections("One"), zoom=2.0, show_markers=False)
        return await session.wait_until_settled()

    result = asyncio.run(scenario(LayoutMeasurement(content_height=USABLE * 5)))
    assert result.mode is PaginationMode.SIMPLE
    assert result.break_offsets == pytest.approx([USABLE, USABLE * 2])
    assert result.estimate is None
    assert result.show_markers is False

    assert asyncio.run(scenario(None)).break_offsets == []


@pytest.mark.unit
def test_unmeasured_surface_uses_estimates():
    async def scenario():
        session = make_session(lambda: None)
        session.update(sections("One"))
        return await session.wait_until_settled()

    result = asyncio.run(scenario())
    assert result.break_offsets == []
    assert result.estimate.pages[0].height == 150.0 + 140.0


@pytest.mark.unit
def test_close_cancels_pending_estimate():
    settled = []

    async def scenario():
        session = PaginationSession(frame_delay=10, settle_delay=0, on_settled=settled.append)
        task = session.update(sections("One"))
        session.close()
        await asyncio.sleep(0)
        return session, task

    session, task = asyncio.run(scenario())
    assert session.state is EstimatorState.IDLE
    assert task.cancelled()
    assert settled == []


@pytest.mark.unit
def test_failing_measure_settles_on_estimates():
    def measure():
        raise RuntimeError("surface detached")

    async def scenario():
        session = make_session(measure)
        session.update(sections("One"))
        result = await session.wait_until_settled()
        return session, result

    session, result = asyncio.run(scenario())
    assert session.state is EstimatorState.SETTLED
    assert session.result is result
    assert result.break_offsets == []
    assert result.estimate.pages[0].height == 150.0 + 140.0


@pytest.mark.unit
def test_failing_callback_does_not_lose_result():
    def on_settled(result):
        raise ValueError("listener gone")

    async def scenario():
        session = make_session(lambda: None, on_settled=on_settled)
        session.update(sections("One"))
        result = await session.wait_until_settled()
        return session, result

    session, result = asyncio.run(scenario())
    assert session.state is EstimatorState.SETTLED
    assert result is not None
    assert session.result is result
