import os

from signature_api.paths import is_absolute, resolve_stored_path, signed_output_path, to_stored_path

ROOT = os.path.abspath("/srv/app/Storage")


def test_absolute_path_used_as_is():
    assert resolve_stored_path("/data/files/a.pdf", ROOT) == os.path.normpath("/data/files/a.pdf")


def test_marker_prefix_is_stripped():
    assert resolve_stored_path("Storage/pdfs/a.pdf", ROOT) == os.path.join(ROOT, "pdfs", "a.pdf")


def test_marker_is_case_insensitive():
    assert resolve_stored_path("storage/pdfs/a.pdf", ROOT) == os.path.join(ROOT, "pdfs", "a.pdf")


def test_marker_must_be_a_whole_segment():
    assert resolve_stored_path("Storagefoo/a.pdf", ROOT) == os.path.join(ROOT, "Storagefoo", "a.pdf")


def test_relative_path_resolves_under_root():
    assert resolve_stored_path("pdfs/a.pdf", ROOT) == os.path.join(ROOT, "pdfs", "a.pdf")


def test_backslashes_are_normalized():
    assert resolve_stored_path("Storage\\pdfs\\a.pdf", ROOT) == os.path.join(ROOT, "pdfs", "a.pdf")


def test_windows_drive_counts_as_absolute():
    assert is_absolute("C:\\Storage\\pdfs\\a.pdf")
    assert not is_absolute("pdfs/a.pdf")


def test_signed_output_path_keeps_folder():
    assert signed_output_path(os.path.join(ROOT, "pdfs", "consent.PDF")) == os.path.join(
        ROOT, "pdfs", "consent_signed.pdf"
    )


def test_stored_path_relative_under_root():
    assert to_stored_path(os.path.join(ROOT, "pdfs", "a_signed.pdf"), ROOT) == "pdfs/a_signed.pdf"


def test_stored_path_absolute_outside_root():
    outside = os.path.abspath("/elsewhere/a_signed.pdf")
    assert to_stored_path(outside, ROOT) == outside
