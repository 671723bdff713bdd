import unittest

from game import (
    PathKind,
    Session,
    resolve,
    select,
    refill,
    undo,
    collapse_empty_rows,
)

_ = None


def play(session, a, b):
    return select(select(session, a).session, b)


class TestTenMasterScenarios(unittest.TestCase):
    def test_twin_fives_clear_the_board(self):
        grid = (5, 5, _, _)
        self.assertEqual(resolve(0, 1, grid, 2), PathKind.SEQUENTIAL)
        res = play(Session(grid=grid, cols=2), 0, 1)
        self.assertEqual(res.session.grid, tuple())
        self.assertTrue(res.session.is_won())

    def test_three_and_seven_across_gap(self):
        grid = (3, _, _, 7)
        self.assertEqual(resolve(0, 3, grid, 4), PathKind.SEQUENTIAL)
        res = play(Session(grid=grid, cols=4), 0, 3)
        self.assertEqual(res.session.grid, tuple())

    def test_refill_without_quota_is_rejected(self):
        s = Session(grid=(1, 2, _, _), cols=2, refills_remaining=0)
        res = refill(s)
        self.assertFalse(res.ok)
        self.assertEqual(res.session.grid, s.grid)
        self.assertEqual(res.session.refills_remaining, 0)

    def test_undo_once_after_match(self):
        s = Session(grid=(4, 6, 2, 9), cols=2, score=10)
        played = play(s, 0, 1).session
        res = undo(played)
        self.assertTrue(res.ok)
        self.assertEqual(res.session.grid, s.grid)
        self.assertEqual(res.session.score, 10)
        self.assertFalse(undo(res.session).ok)

    def test_uncollapsed_empty_board_is_not_a_win(self):
        s = Session(grid=(_, _, _, _), cols=2)
        self.assertFalse(s.is_won())
        self.assertTrue(Session(grid=collapse_empty_rows(s.grid, 2), cols=2).is_won())


if __name__ == '__main__':
    unittest.main(verbosity=2)
