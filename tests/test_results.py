import pytest

from hashref import results
from hashref.input_sources import collect_entries, resolve_file_id
from hashref.models import FileEntry, Occurrence
from hashref.results import (
    NO_SUPPORTED_FILES_MESSAGE,
    SCAN_FAILED_MESSAGE,
    ScanError,
    ScanSession,
    add_occurrences,
    scan_batch,
)


def test_batch_skips_unsupported_files(write_file, entry_for):
    a = write_file("a.txt", "#600 here\n#601")
    b = write_file("b.png", b"#600")
    c = write_file("c.nc", "G0 #600")
    result = scan_batch([entry_for(a), entry_for(b), entry_for(c)], "machines")

    assert result.scanned_files == 2
    assert result.label == "machines"
    assert result.outcome == "matches"
    assert list(result.index) == ["#600", "#601"]
    assert list(result.index["#600"]) == [str(a.absolute()), str(c.absolute())]
    assert str(b.absolute()) not in {f for files in result.index.values() for f in files}


def test_batch_groups_by_pattern_then_file(write_file, sample_text, entry_for):
    path = write_file("vars.txt", sample_text)
    result = scan_batch([entry_for(path)], "vars")
    file_id = str(path.absolute())
    assert [o.line_no for o in result.index["#600"][file_id]] == [1, 4]
    assert [o.line_no for o in result.index["#601"][file_id]] == [1]
    assert [o.line_no for o in result.index["#500"][file_id]] == [2]


def test_batch_with_no_supported_files(write_file, entry_for):
    path = write_file("pic.jpg", b"#600")
    result = scan_batch([entry_for(path)], "pics")
    assert result.scanned_files == 0
    assert result.index == {}
    assert result.outcome == "no_supported_files"


def test_batch_with_no_matches(write_file, entry_for):
    path = write_file("empty.txt", "nothing to see")
    result = scan_batch([entry_for(path)], "quiet")
    assert result.scanned_files == 1
    assert result.outcome == "no_matches"


def test_docx_with_bad_content_counts_but_contributes_nothing(write_file, entry_for):
    path = write_file("notes.docx", b"garbage #600")
    result = scan_batch([entry_for(path)], "docs")
    assert result.scanned_files == 1
    assert result.index == {}


def test_batch_failure_raises_scan_error(write_file, entry_for, tmp_path):
    good = write_file("good.txt", "#100")
    missing = entry_for(tmp_path / "missing.txt")
    with pytest.raises(ScanError) as excinfo:
        scan_batch([entry_for(good), missing], "broken")
    assert "missing.txt" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_add_occurrences_appends_in_order():
    index = {}
    occs = [Occurrence("#100", 1, "a"), Occurrence("#100", 3, "b"), Occurrence("#200", 3, "b")]
    assert add_occurrences(index, "f", occs) == 3
    assert add_occurrences(index, "g", [Occurrence("#100", 2, "c")]) == 1
    assert [o.line_no for o in index["#100"]["f"]] == [1, 3]
    assert list(index["#100"]) == ["f", "g"]


def test_folder_batch_end_to_end(write_file, tmp_path):
    write_file("cnc/a.eia", "#500 = 1\n#501 = #500")
    write_file("cnc/b/c.ptp", "#500")
    write_file("cnc/z.bin", b"#500")
    entries = collect_entries([tmp_path / "cnc"])
    result = scan_batch(entries, "cnc")
    assert result.scanned_files == 2
    files = list(result.index["#500"])
    assert files == [resolve_file_id(entries[0]), resolve_file_id(entries[1])]
    assert [o.line_no for o in result.index["#500"][files[0]]] == [1, 2]


def test_session_publishes_successful_result(write_file, entry_for):
    session = ScanSession()
    path = write_file("a.txt", "#100")
    result = session.run([entry_for(path)], "first")
    assert session.result is result
    assert session.error == ""
    assert session.scanned_files == 1
    assert "#100" in session.index


def test_session_reports_no_supported_files(write_file, entry_for):
    session = ScanSession()
    path = write_file("a.gif", b"#100")
    result = session.run([entry_for(path)], "gifs")
    assert result is not None
    assert session.error == NO_SUPPORTED_FILES_MESSAGE
    assert session.index == {}


def test_session_failure_discards_prior_result(write_file, entry_for, tmp_path):
    session = ScanSession()
    path = write_file("a.txt", "#100")
    session.run([entry_for(path)], "first")
    assert session.index

    broken = FileEntry(name="b.txt", path=tmp_path / "does-not-exist.txt")
    assert session.run([entry_for(path), broken], "second") is None
    assert session.result is None
    assert session.index == {}
    assert session.scanned_files == 0
    assert session.label == "second"
    assert session.error == SCAN_FAILED_MESSAGE


def test_session_wraps_unexpected_scanner_faults(write_file, entry_for, monkeypatch):
    def boom(text, filter_prefix=None):
        raise ValueError("bad text")

    monkeypatch.setattr(results, "scan_text", boom)
    session = ScanSession()
    path = write_file("a.txt", "#100")
    assert session.run([entry_for(path)], "x") is None
    assert session.error == SCAN_FAILED_MESSAGE


def test_symlinked_file_keeps_its_own_entry(write_file, tmp_path):
    target = write_file("proj/a.txt", "#100\n#100")
    link = tmp_path / "proj" / "b.txt"
    try:
        link.symlink_to(target)
    except (OSError, NotImplementedError) as exc:
        pytest.skip(f"symlinks unavailable: {exc}")

    result = scan_batch(collect_entries([tmp_path / "proj"]), "proj")
    file_map = result.index["#100"]
    assert list(file_map) == [str(target.absolute()), str(link.absolute())]
    for occurrences in file_map.values():
        lines = [o.line_no for o in occurrences]
        assert lines == [1, 2]
