import threading
import time
import unittest

from game import PathKind, HintSuggestion, find_hint, validate_suggestion, request_hint

_ = None


class TestHint(unittest.TestCase):
    def test_given_board_with_match_when_find_hint_then_first_pair_in_reading_order(self):
        grid = (1, 2, _, _, 3, 7)
        h = find_hint(grid, 2)
        assert h is not None
        self.assertIsInstance(h, HintSuggestion)
        self.assertEqual((h.idx1, h.idx2, h.path), (4, 5, PathKind.SEQUENTIAL))
        self.assertIn("3 and 7", h.reasoning)

    def test_given_stuck_board_when_find_hint_then_none(self):
        self.assertIsNone(find_hint((1, 2, 3, 4), 2))
        self.assertIsNone(find_hint(tuple(), 2))

    def test_given_valid_suggestion_when_validated_then_accepted(self):
        grid = (1, 2, 3, 7)
        h = validate_suggestion({"idx1": 3, "idx2": 2, "reasoning": "3+7"}, grid, 2)
        assert h is not None
        self.assertEqual((h.idx1, h.idx2), (3, 2))
        self.assertEqual(h.path, PathKind.SEQUENTIAL)
        self.assertEqual(h.reasoning, "3+7")

    def test_given_untrusted_suggestions_when_validated_then_rejected(self):
        grid = (1, 2, 3, 7)
        for bad in (
            None,
            "0,1",
            {"idx1": 0, "idx2": 1},
            {"idx1": 2, "idx2": 2},
            {"idx1": 2, "idx2": 99},
            {"idx1": True, "idx2": 3},
            {"idx1": "2", "idx2": "3"},
            {"idx2": 3},
        ):
            self.assertIsNone(validate_suggestion(bad, grid, 2), repr(bad))

    def test_given_no_provider_when_request_hint_then_local_search(self):
        self.assertEqual(request_hint((5, 5), 2), find_hint((5, 5), 2))

    def test_given_provider_when_request_hint_then_revalidated(self):
        grid = (1, 2, 3, 7)
        good = request_hint(grid, 2, provider=lambda g, c, t: {"idx1": 2, "idx2": 3, "reasoning": "sum"})
        assert good is not None
        self.assertEqual((good.idx1, good.idx2), (2, 3))
        wrong = request_hint(grid, 2, provider=lambda g, c, t: {"idx1": 0, "idx2": 1})
        self.assertIsNone(wrong)
        nothing = request_hint(grid, 2, provider=lambda g, c, t: None)
        self.assertIsNone(nothing)

    def test_given_failing_provider_when_request_hint_then_none(self):
        def boom(grid, cols, timeout):
            raise RuntimeError("service down")

        with self.assertLogs("tenmaster_core.hint", level="WARNING"):
            self.assertIsNone(request_hint((5, 5), 2, provider=boom))

    def test_given_slow_provider_when_request_hint_then_times_out(self):
        def slow(grid, cols, timeout):
            time.sleep(0.5)
            return {"idx1": 0, "idx2": 1}

        with self.assertLogs("tenmaster_core.hint", level="WARNING"):
            self.assertIsNone(request_hint((5, 5), 2, provider=slow, timeout=0.05))

    def test_given_hung_provider_when_request_hint_then_returns_and_worker_is_daemon(self):
        release = threading.Event()
        seen = {}

        def hung(grid, cols, timeout):
            seen["thread"] = threading.current_thread()
            release.wait(5)
            return None

        try:
            started = time.monotonic()
            with self.assertLogs("tenmaster_core.hint", level="WARNING"):
                self.assertIsNone(request_hint((5, 5), 2, provider=hung, timeout=0.05))
            self.assertLess(time.monotonic() - started, 2.0)
            worker = seen["thread"]
            self.assertIsNot(worker, threading.main_thread())
            self.assertTrue(worker.daemon)
        finally:
            release.set()
        worker.join(5)
        self.assertFalse(worker.is_alive())


if __name__ == "__main__":
    unittest.main(verbosity=2)
