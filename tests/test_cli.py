import io

from xxBloomFilter import loadbloom, mkbloom

WORDS = ["30000", "1230213", "1", "hello", "world"]


def make_filter(tmp_path):
    src = tmp_path / "words.txt"
    src.write_text("\n".join(WORDS) + "\n\n", encoding="utf8")
    out = tmp_path / "words.blf"
    assert mkbloom.main([str(src), str(out), "0.001"]) == 0
    return out


def test_mkbloom_then_query(tmp_path, capsys):
    out = make_filter(tmp_path)
    bf = loadbloom.load(str(out))
    assert all(bf.check(word) for word in WORDS)

    stdout = io.StringIO()
    assert loadbloom.main([str(out)] + WORDS, stdout=stdout) == 0
    lines = stdout.getvalue().splitlines()
    assert lines == ["%s\tTrue" % word for word in WORDS]
    err = capsys.readouterr().err
    assert "BLOOM: Hits 5 over Querys: 5" in err
    assert "func:'query' took:" in err


def test_loadbloom_reads_stdin(tmp_path):
    out = make_filter(tmp_path)
    stdout = io.StringIO()
    assert loadbloom.main([str(out)], stdin=io.StringIO("hello\nworld\n"), stdout=stdout) == 0
    assert stdout.getvalue() == "hello\tTrue\nworld\tTrue\n"


def test_mkbloom_usage(capsys):
    assert mkbloom.main([]) == 1
    assert "usage" in capsys.readouterr().err


def test_mkbloom_bad_rate(tmp_path, capsys):
    src = tmp_path / "words.txt"
    src.write_text("a\n", encoding="utf8")
    assert mkbloom.main([str(src), str(tmp_path / "x.blf"), "2.0"]) == 1
    assert "BLOOM:" in capsys.readouterr().err


def test_loadbloom_bad_file(tmp_path, capsys):
    bad = tmp_path / "bad.blf"
    bad.write_bytes(b"not a filter")
    assert loadbloom.main([str(bad), "x"]) == 1
    assert "Error loading filter" in capsys.readouterr().err
    assert loadbloom.main([]) == 1


def test_mkbloom_missing_input(tmp_path, capsys):
    assert mkbloom.main([str(tmp_path / "missing.txt"), str(tmp_path / "x.blf")]) == 1
    assert "BLOOM:" in capsys.readouterr().err
    assert not (tmp_path / "x.blf").exists()
