"""Tests for folder-name id resolution."""

from sources.identifiers import FALLBACK_ID_START, IdentifierResolver


def test_numeric_prefix_is_id():
    resolver = IdentifierResolver()

    assert resolver.resolve("123456 Artist - Title") == ("123456", False)
    assert resolver.resolve("42") == ("42", False)


def test_leading_zeros_preserved():
    resolver = IdentifierResolver()

    assert resolver.resolve("007 Bond Theme") == ("007", False)


def test_non_numeric_gets_fallback():
    resolver = IdentifierResolver()

    song_id, is_fallback = resolver.resolve("NoNumberPrefix")

    assert is_fallback
    assert int(song_id) >= 2 ** 30
    assert song_id == str(FALLBACK_ID_START)


def test_fallbacks_are_unique_and_increasing():
    resolver = IdentifierResolver()

    ids = [resolver.resolve(name)[0] for name in ("a", "b", "Song 12", "c")]

    assert len(set(ids)) == 4
    assert [int(i) for i in ids] == sorted(int(i) for i in ids)


def test_repeated_prefix_gets_fallback():
    resolver = IdentifierResolver()

    first = resolver.resolve("100 Song A")
    second = resolver.resolve("100 Song B")

    assert first == ("100", False)
    assert second[1] is True
    assert second[0] != "100"


def test_fallback_skips_ids_already_taken_by_real_folders():
    resolver = IdentifierResolver()
    taken = str(FALLBACK_ID_START)

    resolver.resolve(f"{taken} Huge Id")
    song_id, is_fallback = resolver.resolve("Legacy Folder")

    assert is_fallback
    assert song_id == str(FALLBACK_ID_START + 1)
    assert resolver.issued_count == 2


def test_collision_names_the_owner():
    resolver = IdentifierResolver()

    resolver.resolve("100 Song A")
    resolver.resolve("100 Song B")

    assert resolver.collision("100 Song B") == ("100", "100 Song A")
    assert resolver.collision("NoNumberPrefix") is None
    assert resolver.collision("7 Unseen") is None
