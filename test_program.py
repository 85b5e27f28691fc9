import io

import matplotlib
import pytest

matplotlib.use("Agg")

from convex_hull_graham import deduplicate
from geometry import Point
from program import (
    DEMO_POINTS,
    generate_random_points,
    main,
    parse_points,
    write_hull,
)


SQUARE_INPUT = "5\n0 0\n0 4\n4 4\n4 0\n2 2\n"


def run(argv, text=""):
    out = io.StringIO()
    code = main(argv, stdin=io.StringIO(text), stdout=out)
    return code, out.getvalue()


def test_parse_points():
    assert parse_points("3\n1 2\n3 4\n5 6\n") == [Point(1, 2), Point(3, 4), Point(5, 6)]
    assert parse_points("2 1.5 2 -3 4e1") == [Point(1.5, 2), Point(-3, 40.0)]


def test_parse_points_keeps_integers_exact():
    p = parse_points("1\n12345678901234567890 7")[0]
    assert p.x == 12345678901234567890
    assert isinstance(p.x, int)


@pytest.mark.parametrize("text", ["0", "-3\n1 2", ""])
def test_parse_no_points(text):
    assert parse_points(text) == []


@pytest.mark.parametrize("text, message", [
    ("x\n1 2", "count"),
    ("2.5\n1 2", "count"),
    ("2\n1 2\n3", "Expected 2 points"),
    ("1\n1 y", "Not a number"),
])
def test_parse_errors(text, message):
    with pytest.raises(ValueError, match=message):
        parse_points(text)


def test_write_hull():
    out = io.StringIO()
    write_hull([Point(0, 0), Point(1.5, 2), Point(0.1, 3)], out)
    assert out.getvalue() == "3\n0 0\n1.5 2\n0.1 3\n"


def test_main_from_stdin():
    code, out = run([], SQUARE_INPUT)
    assert code == 0
    assert out == "4\n0 0\n4 0\n4 4\n0 4\n"


def test_main_from_file(tmp_path):
    path = tmp_path / "points.txt"
    path.write_text("6\n0 0\n0 0\n4 0\n4 0\n4 4\n0 4\n", encoding="utf-8")
    code, out = run([str(path)])
    assert code == 0
    assert out == "4\n0 0\n4 0\n4 4\n0 4\n"


def test_main_keep_all_policy():
    code, out = run(["--policy", "keep-all-on-edges"], "5\n0 0\n2 0\n4 0\n4 4\n0 4\n")
    assert code == 0
    assert out.splitlines()[0] == "5"
    assert "2 0" in out.splitlines()


def test_main_non_positive_count():
    code, out = run([], "0\n")
    assert code == 0
    assert out == "0\n"


def test_main_empty_input_uses_demo():
    code, out = run([], "")
    demo_code, demo_out = run(["--demo"])
    assert code == demo_code == 0
    assert out == demo_out


def test_demo_points():
    code, out = run(["--demo"])
    assert code == 0
    assert out == "6\n0 0\n4 0\n10 8\n9 21\n0 20\n-5 10\n"


def test_main_bad_input(caplog):
    code, out = run([], "2\n1 2\n3 oops\n")
    assert code == 1
    assert out == ""
    assert "Not a number" in caplog.text


def test_main_missing_file(tmp_path, caplog):
    code, out = run([str(tmp_path / "missing.txt")])
    assert code == 1
    assert "Could not read points" in caplog.text


def test_main_trace():
    code, out = run(["--trace"], SQUARE_INPUT)
    assert code == 0
    assert out.startswith("# step 0\n(4, 0)\n(0, 0)\n\n")
    assert out.endswith("4\n0 0\n4 0\n4 4\n0 4\n")


def test_main_compare():
    code, out = run(["--compare", "--random", "300", "--distribution", "gaussian"])
    assert code == 0
    assert "graham" in out
    assert "andrew" in out
    assert "hulls agree: yes" in out


def test_main_plot(tmp_path):
    path = tmp_path / "hull.png"
    code, _ = run(["--plot", str(path), "--trace"], SQUARE_INPUT)
    assert code == 0
    assert path.stat().st_size > 0


@pytest.mark.parametrize("distribution", ["uniform", "uniform_int", "circle", "gaussian", "clusters"])
def test_generate_random_points(distribution):
    points = generate_random_points(200, distribution, seed=1)
    assert len(points) == 200
    assert points == generate_random_points(200, distribution, seed=1)

    if distribution == "uniform_int":
        assert all(isinstance(p.x, int) and isinstance(p.y, int) for p in points)


def test_generate_unknown_distribution():
    with pytest.raises(ValueError):
        generate_random_points(10, "spiral")


def test_demo_has_duplicates():
    assert len(deduplicate(DEMO_POINTS)) < len(DEMO_POINTS)


@pytest.mark.parametrize("text", ["1\ninf 0", "1\n0 -inf", "1\nnan 1", "2\n0 0\n1 NaN"])
def test_parse_rejects_non_finite(text):
    with pytest.raises(ValueError, match="finite"):
        parse_points(text)


def test_main_non_finite_input(caplog):
    code, out = run([], "3\n0 0\n1 0\nnan 1\n")
    assert code == 1
    assert out == ""
    assert "finite" in caplog.text
