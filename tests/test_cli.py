import pytest

import main as opener_report
import simulate


def test_simulate_with_cache(tmp_path, word_file, weighted_file, capsys):
    cache_path = tmp_path / "cache.npz"
    simulate.main([
        "-answers", str(word_file),
        "-dictionary", str(weighted_file),
        "-cache", str(cache_path),
        "-progress", "off",
        "-opener", "tares",
    ])
    out = capsys.readouterr().out
    assert cache_path.exists()
    assert "Opening guess: tares" in out
    assert "Win rate: 100.00" in out


def test_simulate_without_cache_verbose(word_file, weighted_file, capsys):
    simulate.main([
        "-answers", str(word_file),
        "-dictionary", str(weighted_file),
        "-no-cache",
        "-progress", "off",
        "-opener", "auto",
        "-limit", "2",
        "-verbose",
    ])
    out = capsys.readouterr().out
    assert "Games played: 2" in out
    assert "apple: solved" in out


def test_simulate_random_unweighted(tmp_path, word_file, weighted_file, capsys):
    simulate.main([
        "-answers", str(word_file),
        "-dictionary", str(word_file),
        "-unweighted",
        "-cache", str(tmp_path / "cache.npz"),
        "-progress", "off",
        "-strategy", "random",
        "-seed", "3",
    ])
    assert "Games played: 5" in capsys.readouterr().out


def test_simulate_rejects_bad_word_list(tmp_path, weighted_file):
    bad = tmp_path / "bad.txt"
    bad.write_text("apple\nbanana\n")
    with pytest.raises(SystemExit, match="bad.txt:2"):
        simulate.main(["-answers", str(bad), "-dictionary", str(weighted_file),
                       "-no-cache", "-progress", "off"])


def test_simulate_rejects_bad_opener(word_file, weighted_file):
    with pytest.raises(SystemExit):
        simulate.main(["-answers", str(word_file), "-dictionary", str(weighted_file),
                       "-no-cache", "-opener", "toolong"])


def test_wide_needs_cache(word_file, weighted_file):
    with pytest.raises(SystemExit, match="-wide"):
        simulate.main(["-answers", str(word_file), "-dictionary", str(weighted_file),
                       "-no-cache", "-wide"])


def test_opener_report(tmp_path, weighted_file, capsys):
    opener_report.main([
        "-dictionary", str(weighted_file),
        "-cache", str(tmp_path / "cache.npz"),
        "-top", "3",
    ])
    out = capsys.readouterr().out
    assert "Top opening guesses:" in out
    assert out.count(" bits") == 3
