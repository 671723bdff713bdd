import unittest

from game import GameConfig, GRID_COLUMNS, INITIAL_FILL_COUNT, MAX_REFILLS, MATCH_REWARD
from tenmaster_core.config import DEFAULT_DB, env_flag


class TestConfig(unittest.TestCase):
    def test_given_empty_env_when_loading_then_defaults(self):
        cfg = GameConfig.from_env({})
        self.assertEqual(cfg, GameConfig())
        self.assertEqual(cfg.cols, GRID_COLUMNS)
        self.assertEqual(cfg.initial_fill, INITIAL_FILL_COUNT)
        self.assertEqual(cfg.max_refills, MAX_REFILLS)
        self.assertEqual(cfg.match_reward, MATCH_REWARD)
        self.assertEqual(cfg.db_path, DEFAULT_DB)
        self.assertFalse(cfg.debug)

    def test_given_env_values_when_loading_then_applied(self):
        cfg = GameConfig.from_env({
            "TENMASTER_COLS": "9",
            "TENMASTER_FILL": "27",
            "TENMASTER_MAX_REFILLS": "0",
            "TENMASTER_REWARD": "5",
            "TENMASTER_DB": "/tmp/x.db",
            "TENMASTER_DEBUG": "yes",
        })
        self.assertEqual(cfg.cols, 9)
        self.assertEqual(cfg.initial_fill, 27)
        self.assertEqual(cfg.max_refills, 0)
        self.assertEqual(cfg.match_reward, 5)
        self.assertEqual(cfg.db_path, "/tmp/x.db")
        self.assertTrue(cfg.debug)

    def test_given_invalid_numbers_when_loading_then_defaults_and_warning(self):
        with self.assertLogs("tenmaster_core.config", level="WARNING"):
            cfg = GameConfig.from_env({"TENMASTER_COLS": "ten", "TENMASTER_MAX_REFILLS": "-1"})
        self.assertEqual(cfg.cols, GRID_COLUMNS)
        self.assertEqual(cfg.max_refills, MAX_REFILLS)
        with self.assertLogs("tenmaster_core.config", level="WARNING"):
            self.assertEqual(GameConfig.from_env({"TENMASTER_COLS": "0"}).cols, GRID_COLUMNS)

    def test_given_flag_strings_when_parsing_then_truthy_set(self):
        for v in ("1", "true", "YES", " on "):
            self.assertTrue(env_flag(v))
        for v in (None, "", "0", "false", "off"):
            self.assertFalse(env_flag(v))


if __name__ == "__main__":
    unittest.main(verbosity=2)
