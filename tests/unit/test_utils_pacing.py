"""Unit tests for the FixedIntervalPacer class."""

import pytest

from github_dev_aggregator.utils.pacing import FixedIntervalPacer

from .utils import RecordingSleep


@pytest.mark.asyncio
async def test_pause_waits_one_interval(recording_sleep: RecordingSleep) -> None:
    """Test that each pause waits exactly one interval."""
    pacer = FixedIntervalPacer(1.0, sleep=recording_sleep)
    await pacer.pause()
    await pacer.pause()
    assert recording_sleep.calls == [1.0, 1.0]


@pytest.mark.asyncio
async def test_stagger_scales_with_index(recording_sleep: RecordingSleep) -> None:
    """Test that the n-th staggered call waits n intervals and the first does not wait."""
    pacer = FixedIntervalPacer(0.1, sleep=recording_sleep)
    for index in range(4):
        await pacer.stagger(index)
    assert recording_sleep.calls == pytest.approx([0.1, 0.2, 0.3])


@pytest.mark.asyncio
async def test_zero_interval_never_sleeps(recording_sleep: RecordingSleep) -> None:
    """Test that a zero interval disables pacing."""
    pacer = FixedIntervalPacer(0, sleep=recording_sleep)
    await pacer.pause()
    await pacer.stagger(5)
    assert recording_sleep.calls == []


def test_negative_interval_rejected() -> None:
    """Test that a negative interval is rejected."""
    with pytest.raises(ValueError):
        FixedIntervalPacer(-0.5)
