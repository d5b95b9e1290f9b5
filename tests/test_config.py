# tests/test_config.py
from gridpath.config import Settings, resolve_settings


def test_defaults():
    s = resolve_settings(argv=[], env={})
    assert s == Settings()
    assert (s.speed, s.algorithm, s.rows, s.cols, s.log_level) == (50, "dijkstra", 20, 40, "INFO")


def test_env_values():
    env = {"GRIDPATH_SPEED": "80", "GRIDPATH_ALGO": "AStar", "GRIDPATH_ROWS": "15"}
    s = resolve_settings(argv=[], env=env)
    assert s.speed == 80
    assert s.algorithm == "astar"
    assert s.rows == 15


def test_cli_overrides_env():
    env = {"GRIDPATH_SPEED": "80", "GRIDPATH_ALGO": "bfs"}
    s = resolve_settings(argv=["--speed=10", "--algo=dfs", "--log-level=debug"], env=env)
    assert s.speed == 10
    assert s.algorithm == "dfs"
    assert s.log_level == "DEBUG"


def test_bad_values_fall_back_to_defaults():
    s = resolve_settings(
        argv=["--speed=fast", "--algo=greedy", "--cols=1", "--log-level=loud", "stray"],
        env={"GRIDPATH_ROWS": "9999"},
    )
    assert s == Settings()
