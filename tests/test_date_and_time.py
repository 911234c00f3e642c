from homealarm.date_and_time import RealTimeClock


def _fixed_clock():
    state = {"now": 1000.0}
    return state, lambda: state["now"]


def test_now_follows_underlying_clock():
    state, clock = _fixed_clock()
    rtc = RealTimeClock(clock)
    assert rtc.now() == 1000
    state["now"] += 5
    assert rtc.now() == 1005


def test_write_then_read_gives_ctime_string():
    _, clock = _fixed_clock()
    rtc = RealTimeClock(clock)
    rtc.write(2024, 3, 5, 14, 7, 9)
    assert rtc.read() == "Tue Mar  5 14:07:09 2024\n"


def test_write_one_second_apart():
    _, clock = _fixed_clock()
    rtc = RealTimeClock(clock)
    rtc.write(2024, 3, 5, 14, 7, 9)
    first = rtc.now()
    rtc.write(2024, 3, 5, 14, 7, 10)
    assert rtc.now() - first == 1


def test_clock_keeps_running_after_write():
    state, clock = _fixed_clock()
    rtc = RealTimeClock(clock)
    rtc.write(2024, 3, 5, 14, 7, 9)
    before = rtc.now()
    state["now"] += 60
    assert rtc.now() - before == 60


def test_read_ends_with_newline():
    _, clock = _fixed_clock()
    rtc = RealTimeClock(clock)
    text = rtc.read()
    assert text.endswith("\n")
    assert text.count("\n") == 1