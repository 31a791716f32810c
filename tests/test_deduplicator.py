"""
End-to-end tests for DeduplicatorImpl.
Covers the duplicate-group invariants, early exits and sampling safety.
"""
import hashlib
import random

import pytest

from dupsift.core import DeduplicatorImpl, HasherImpl, File, FileReadError, Stage

KB = 1024
MB = 1024 * KB


class CountingHasher(HasherImpl):
    """HasherImpl that records every fingerprint request that reached the disk."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.computed = []

    def fingerprint(self, file, quick):
        cached = file.hashes.quick if quick else file.hashes.full
        if cached is None:
            self.computed.append((file.path, quick))
        return super().fingerprint(file, quick)


def membership(groups):
    return {frozenset(g.paths) for g in groups}


class TestScenarios:

    def test_two_of_three_equal_files(self, make_file):
        a = make_file("a", b"X" * 1000)
        b = make_file("b", b"X" * 1000)
        c = make_file("c", b"Y" * 1000)

        groups, _ = DeduplicatorImpl().find_duplicates([a, b, c])

        assert membership(groups) == {frozenset({a.path, b.path})}
        assert groups[0].size == 1000
        assert groups[0].hash == hashlib.sha256(b"X" * 1000).hexdigest()

    def test_distinct_sizes_are_never_duplicates(self, make_file):
        files = [make_file("a", b"Q" * 500), make_file("b", b"Q" * 501)]
        hasher = CountingHasher()

        groups, _ = DeduplicatorImpl(hasher=hasher).find_duplicates(files)

        assert groups == []
        assert hasher.computed == []

    def test_empty_input(self):
        groups, stats = DeduplicatorImpl().find_duplicates([])
        assert groups == []
        assert list(stats.stage_stats) == [Stage.SIZE.value]

    def test_multiple_groups(self, make_file):
        files = [
            make_file("x1", b"1" * 64),
            make_file("y1", b"2" * 64),
            make_file("x2", b"1" * 64),
            make_file("y2", b"2" * 64),
            make_file("z1", b"3" * 128),
            make_file("z2", b"3" * 128),
            make_file("z3", b"3" * 128),
        ]

        groups, _ = DeduplicatorImpl().find_duplicates(files)

        assert membership(groups) == {
            frozenset({files[0].path, files[2].path}),
            frozenset({files[1].path, files[3].path}),
            frozenset({files[4].path, files[5].path, files[6].path}),
        }

    def test_shared_size_unique_content_excluded(self, make_file):
        files = [make_file(f"f{i}", bytes([i]) * 256) for i in range(4)]
        files.append(make_file("copy", bytes([0]) * 256))

        groups, _ = DeduplicatorImpl().find_duplicates(files)

        assert membership(groups) == {frozenset({files[0].path, files[4].path})}


class TestEarlyExits:

    def test_full_stage_skipped_when_quick_stage_empty(self, make_file):
        files = [make_file("a", b"A" * 300), make_file("b", b"B" * 300)]
        hasher = CountingHasher()

        groups, stats = DeduplicatorImpl(hasher=hasher).find_duplicates(files)

        assert groups == []
        assert all(quick for _, quick in hasher.computed)
        assert Stage.FULL.value not in stats.stage_stats

    def test_stats_record_each_stage(self, make_file):
        files = [make_file("a", b"A" * 300), make_file("b", b"A" * 300), make_file("c", b"C" * 10)]

        _, stats = DeduplicatorImpl().find_duplicates(files)

        assert list(stats.stage_stats) == [Stage.SIZE.value, Stage.QUICK.value, Stage.FULL.value]
        for data in stats.stage_stats.values():
            assert data["groups"] == 1
            assert data["files"] == 2
        assert stats.total_time >= 0
        assert "Full Content Hash Groups: 1 / 2" in stats.print_summary()

    def test_each_file_fully_hashed_at_most_once(self, make_file):
        content = bytes(range(256)) * 512  # 128KB, sampled with a 64KB threshold
        files = [make_file(f"f{i}", content) for i in range(3)]
        hasher = CountingHasher(sample_threshold=64 * KB, sample_window=4 * KB)

        DeduplicatorImpl(hasher=hasher).find_duplicates(files)
        DeduplicatorImpl(hasher=hasher).find_duplicates(files)

        full_requests = [path for path, quick in hasher.computed if not quick]
        assert sorted(full_requests) == sorted(f.path for f in files)


class TestSamplingSafety:

    def test_sampled_match_with_middle_difference_is_excluded(self, make_file):
        """Files equal in begin/end windows but differing in the middle are not duplicates."""
        size = 256 * KB
        base = bytearray(b"S" * size)
        file1 = make_file("one.bin", bytes(base))
        base[size // 2] = ord("T")
        file2 = make_file("two.bin", bytes(base))
        hasher = CountingHasher(sample_threshold=64 * KB, sample_window=4 * KB, sample_middle=False)

        groups, stats = DeduplicatorImpl(hasher=hasher).find_duplicates([file1, file2])

        assert file1.hashes.quick == file2.hashes.quick  # Quick stage could not tell them apart
        assert stats.stage_stats[Stage.QUICK.value]["groups"] == 1
        assert groups == []

    def test_twenty_megabyte_files_differing_at_ten_megabytes(self, tmp_path):
        size = 20 * MB
        paths = []
        for name, middle in (("first.bin", b"\x00"), ("second.bin", b"\x01")):
            path = tmp_path / name
            with open(path, "wb") as f:
                f.write(b"\xab" * (10 * MB))
                f.write(middle)
                f.write(b"\xab" * (size - 10 * MB - 1))
            paths.append(path)
        files = [File(path=str(p), size=size) for p in paths]

        groups, _ = DeduplicatorImpl().find_duplicates(files)

        assert groups == []

    def test_difference_outside_all_windows_caught_by_full_stage(self, make_file):
        size = 256 * KB
        base = bytearray(b"W" * size)
        file1 = make_file("one.bin", bytes(base))
        base[10 * KB] = 0
        file2 = make_file("two.bin", bytes(base))
        file3 = make_file("three.bin", bytes(base))

        hasher = HasherImpl(sample_threshold=64 * KB, sample_window=4 * KB)
        groups, _ = DeduplicatorImpl(hasher=hasher).find_duplicates([file1, file2, file3])

        assert file1.hashes.quick == file2.hashes.quick == file3.hashes.quick
        assert membership(groups) == {frozenset({file2.path, file3.path})}


class TestInvariants:

    @pytest.fixture
    def random_tree(self, make_file):
        rng = random.Random(1234)
        # Few sizes, more contents: equal sizes with different content are common
        contents = [bytes(rng.getrandbits(8) for _ in range(rng.choice([16, 32, 33])))
                    for _ in range(6)]
        return [make_file(f"file{i:02d}", rng.choice(contents)) for i in range(30)]

    def test_groups_share_size_and_full_digest(self, random_tree):
        groups, _ = DeduplicatorImpl().find_duplicates(random_tree)

        assert groups
        for group in groups:
            assert group.duplicate_count >= 2
            digests = set()
            for file in group.files:
                with open(file.path, "rb") as f:
                    data = f.read()
                assert len(data) == group.size == file.size
                digests.add(hashlib.sha256(data).hexdigest())
            assert digests == {group.hash}

    def test_every_duplicate_is_reported(self, random_tree):
        groups, _ = DeduplicatorImpl().find_duplicates(random_tree)

        by_content = {}
        for file in random_tree:
            with open(file.path, "rb") as f:
                by_content.setdefault(f.read(), set()).add(file.path)
        expected = {frozenset(p) for p in by_content.values() if len(p) >= 2}

        assert membership(groups) == expected

    def test_idempotent_membership(self, random_tree):
        first, _ = DeduplicatorImpl().find_duplicates(random_tree)
        fresh = [File(path=f.path, size=f.size) for f in random_tree]
        second, _ = DeduplicatorImpl().find_duplicates(list(reversed(fresh)))

        assert membership(first) == membership(second)


class TestErrors:

    def test_unreadable_candidate_aborts_run(self, make_file, tmp_path):
        a = make_file("a", b"same")
        b = make_file("b", b"same")
        (tmp_path / "b").unlink()

        with pytest.raises(FileReadError) as exc_info:
            DeduplicatorImpl().find_duplicates([a, b])
        assert exc_info.value.path == b.path

    def test_unique_size_file_is_never_read(self, make_file):
        a = make_file("a", b"same")
        b = make_file("b", b"same")
        ghost = File(path=a.path + ".ghost", size=999)

        groups, _ = DeduplicatorImpl().find_duplicates([a, ghost, b])

        assert membership(groups) == {frozenset({a.path, b.path})}
