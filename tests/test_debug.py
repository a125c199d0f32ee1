"""Tests for the debug manager: levels, log file, timers and counters."""

from connect4_search.debug import debug, DebugLevel


class TestDebugManager:

    def test_level_filtering(self):
        debug.configure(level=DebugLevel.INFO)
        assert debug.is_enabled_for(DebugLevel.INFO)
        assert not debug.is_enabled_for(DebugLevel.DEBUG)
        assert not debug.is_enabled_for(DebugLevel.NONE)

    def test_component_filtering(self):
        debug.configure(level=DebugLevel.TRACE, components=["search"])
        try:
            assert debug.is_enabled_for(DebugLevel.DEBUG, "search")
            assert not debug.is_enabled_for(DebugLevel.DEBUG, "board")
        finally:
            debug.configure(components=[])

    def test_set_from_string(self):
        debug.set_from_string("error")
        assert not debug.is_enabled_for(DebugLevel.WARNING)
        debug.set_from_string("bogus")
        assert not debug.is_enabled_for(DebugLevel.WARNING)

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "search.log"
        debug.configure(level=DebugLevel.INFO, log_file=str(log_file))
        try:
            debug.info("searching", "search")
        finally:
            debug.configure(log_file="")
        assert "[search] searching" in log_file.read_text()

    def test_timers(self):
        debug.start_timer("work")
        assert debug.end_timer("work") >= 0.0
        assert debug.end_timer("work") is None

    def test_counters(self):
        debug.increment("nodes")
        debug.increment("nodes", 4)
        assert debug.get_counter("nodes") == 5
        debug.reset_counters()
        assert debug.get_counter("nodes") == 0
