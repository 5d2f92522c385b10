"""
File Store Tests
"""

from storage.file_store import FileStore, safe_filename


def test_safe_filename():
    assert safe_filename("land proof 2024.pdf") == "land_proof_2024.pdf"
    assert safe_filename("../../etc/passwd") == "passwd"
    assert safe_filename("") == "file"


def test_save_and_remove(tmp_path):
    store = FileStore(tmp_path / "uploads")
    ref = store.save(b"hello", "wheat photo.jpg")

    assert ref.startswith("/uploads/")
    assert ref.endswith("-wheat_photo.jpg")
    assert store.path_for(ref).read_bytes() == b"hello"

    assert store.remove(ref) is True
    assert not store.path_for(ref).exists()
    assert store.remove(ref) is False
    assert store.remove(None) is False


def test_same_name_saved_twice_gets_distinct_refs(tmp_path):
    """Back-to-back uploads with one file name never overwrite each other."""
    store = FileStore(tmp_path / "uploads")
    refs = []
    for i in range(50):
        first = store.save(b"A", "photo.jpg")
        second = store.save(b"B", "photo.jpg")
        assert first != second
        assert store.path_for(first).read_bytes() == b"A"
        assert store.path_for(second).read_bytes() == b"B"
        refs.extend([first, second])

    assert len(set(refs)) == 100
