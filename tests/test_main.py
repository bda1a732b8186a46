import argparse
import json
import logging

import pytest

from main import build_parser, config_from_args, main, parse_point_pair, positive_int


def test_parse_point_pair():
    assert parse_point_pair("1:2,30:4") == ((1, 2), (30, 4))
    # empty tokens are ignored
    assert parse_point_pair("1:2,,3:4,") == ((1, 2), (3, 4))


@pytest.mark.parametrize("text", ["1:2", "1:2,3:4,5:6", "1:2:3,4:5", "1,2:3", "a:1,2:3", "-1:0,1:1"])
def test_parse_point_pair_rejects_malformed(text):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_point_pair(text)


@pytest.mark.parametrize("text", ["0", "-3", "x", "1.5"])
def test_positive_int_rejects(text):
    with pytest.raises(argparse.ArgumentTypeError):
        positive_int(text)


def test_parser_defaults():
    args = build_parser().parse_args(["-i", "maze.txt"])
    assert (args.attempts, args.tries, args.searches) == (1, 1, 1)
    assert args.points is None
    assert args.path_algo_name == "AStar"
    assert args.interior_only is True


def test_parser_collects_points():
    args = build_parser().parse_args(
        ["-i", "m.txt", "-p", "1:1,2:2", "--point", "3:3,4:4", "-a", "7", "--full-scan"]
    )
    assert args.points == [((1, 1), (2, 2)), ((3, 3), (4, 4))]
    assert args.attempts == 7
    assert args.interior_only is False


def test_bad_point_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["-i", "m.txt", "-p", "1:1"])
    assert exc.value.code == 2


def test_main_points_mode(maze_path, capsys):
    assert main(["-i", str(maze_path), "-t", "3", "-p", "1:1,3:1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("#0 | Duration: ")
    assert lines[0].endswith("| Points: 1:1,3:1 | Path: 3 | Attempts: 1")
    assert lines[3].startswith("Avg: ")


def test_main_random_mode_with_outputs(maze_path, tmp_path, capsys):
    argv = ["-i", str(maze_path), "-s", "3", "-a", "2", "--seed", "4",
            "--output-dir", str(tmp_path), "--plot"]
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert "Run directory:" in out

    (run_dir,) = list(tmp_path.iterdir())
    config = json.loads((run_dir / "config.json").read_text())
    assert config["seed"] == 4 and config["attempts"] == 2
    summary = json.loads((run_dir / "summary.json").read_text())
    assert summary["benchmark"]["mode"] == "random"
    assert summary["grid"]["cols"] == 41
    assert (run_dir / "records.csv").exists()
    assert (run_dir / "maze.png").exists()


def test_main_malformed_maze_exits(tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_text("###\n##\n")
    with pytest.raises(SystemExit) as exc:
        main(["-i", str(bad)])
    assert exc.value.code == 2


def test_verbose_prints_each_record_once(maze_path, capsys, caplog):
    args = build_parser().parse_args(["-i", str(maze_path), "-v"])
    assert config_from_args(args).log_events is False

    with caplog.at_level(logging.DEBUG):
        assert main(["-i", str(maze_path), "-v", "-t", "2", "-p", "1:1,3:1"]) == 0
    out = capsys.readouterr().out
    assert out.count("| Points: 1:1,3:1 |") == 2

    logged = [r for r in caplog.records if "| Points:" in r.getMessage()]
    assert all(r.levelno < logging.INFO for r in logged)
