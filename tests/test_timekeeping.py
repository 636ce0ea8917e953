from orrery.core.timekeeping import FixedStepAccumulator, FrameTimer


def test_accumulator_hands_out_whole_steps():
    acc = FixedStepAccumulator(step=0.5, max_substeps=4)
    acc.accrue(0.25)
    assert acc.consume() == 0
    acc.accrue(1.0)
    assert acc.consume() == 2
    assert acc.value == 0.25


def test_accumulator_drops_backlog_past_cap():
    acc = FixedStepAccumulator(step=0.5, max_substeps=4)
    acc.accrue(10.0)
    assert acc.consume() == 4
    assert acc.value == 0.0


def test_accumulator_ignores_negative_time_and_clears():
    acc = FixedStepAccumulator(step=0.5, max_substeps=4)
    acc.accrue(-3.0)
    assert acc.value == 0.0
    acc.accrue(0.4)
    acc.clear()
    assert acc.consume() == 0


def test_frame_timer_is_monotonic():
    timer = FrameTimer()
    assert timer.tick() >= 0.0
    timer.restart()
    assert timer.tick() >= 0.0


def test_frame_timer_caps_long_frames():
    timer = FrameTimer(max_delta=0.25)
    timer.last_time -= 10.0
    assert timer.tick() == 0.25
