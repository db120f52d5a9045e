"""Unit tests for EntrySet and subdomain expansion."""

import threading
import time

import pytest

from edgeblock.core.edgeos.entries import EntrySet, ReadWriteLock, get_subdomains


class TestGetSubdomains:
    """Tests for get_subdomains()."""

    def test_expands_parent_domains(self):
        assert get_subdomains("a.b.example.com") == [
            "a.b.example.com",
            "b.example.com",
            "example.com",
        ]

    def test_two_label_domain(self):
        assert get_subdomains("example.com") == ["example.com"]

    def test_single_label(self):
        assert get_subdomains("localhost") == ["localhost"]

    def test_empty_key(self):
        assert get_subdomains("") == []

    def test_ignores_leading_and_trailing_dots(self):
        assert get_subdomains(".ads.example.com.") == ["ads.example.com", "example.com"]


class TestEntrySetLookup:
    """Tests for exact and suffix lookup."""

    def test_contains_exact(self):
        entries = EntrySet(["example.org"])
        assert entries.contains("example.org")
        assert "example.org" in entries
        assert not entries.contains("sub.example.org")

    @pytest.mark.parametrize("member", [
        "mail.ads.example.com",
        "ads.example.com",
        "example.com",
    ])
    def test_contains_suffix_matches_any_parent(self, member):
        entries = EntrySet([member])
        assert entries.contains_suffix("mail.ads.example.com")

    def test_contains_suffix_ignores_tld_and_unrelated(self):
        entries = EntrySet(["com", "other.example.com"])
        assert not entries.contains_suffix("mail.ads.example.com")

    def test_contains_suffix_does_not_match_children(self):
        entries = EntrySet(["mail.ads.example.com"])
        assert not entries.contains_suffix("ads.example.com")

    def test_empty_set(self):
        entries = EntrySet()
        assert len(entries) == 0
        assert not entries.contains_suffix("example.com")


class TestEntrySetMutation:
    """Tests for add, set and merge."""

    def test_add_keeps_existing_counter(self):
        entries = EntrySet()
        entries.set("example.com", 3)
        entries.add(["example.com", "example.org"])
        assert entries.items() == {"example.com": 3, "example.org": 0}

    def test_add_duplicates_once(self):
        entries = EntrySet(["a.com", "a.com", "b.com"])
        assert len(entries) == 2
        assert entries.keys() == ["a.com", "b.com"]

    def test_merge_unions_into_receiver(self):
        a = EntrySet(["a.com"])
        b = EntrySet(["b.com"])
        merged = a.merge(b)
        assert merged is a
        assert a.keys() == ["a.com", "b.com"]
        assert b.keys() == ["b.com"]

    def test_merge_with_self(self):
        a = EntrySet(["a.com"])
        assert a.merge(a).keys() == ["a.com"]


class TestEntrySetRender:
    """Tests for render()."""

    def test_render_sorted(self):
        entries = EntrySet(["zeta.com", "alpha.com"])
        entries.set("mid.com", 2)
        assert entries.render() == '"alpha.com":0,\n"mid.com":2,\n"zeta.com":0,\n'
        assert str(entries) == entries.render()

    def test_render_empty(self):
        assert EntrySet().render() == ""


class TestEntrySetConcurrency:
    """Readers and writers running together."""

    def test_concurrent_add_and_lookup(self):
        entries = EntrySet()
        errors = []

        def writer(start):
            for i in range(start, start + 200):
                entries.add([f"host{i}.example.com"])

        def reader():
            try:
                for _ in range(200):
                    entries.contains_suffix("x.example.com")
                    entries.render()
            except Exception as exc:  # pragma: no cover
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(n * 200,)) for n in range(4)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(entries) == 800

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        order = []
        reading = threading.Event()
        release = threading.Event()

        def reader():
            with lock.read_locked():
                reading.set()
                release.wait(timeout=5)
                order.append("read")

        def writer():
            with lock.write_locked():
                order.append("write")

        r = threading.Thread(target=reader)
        r.start()
        reading.wait(timeout=5)
        w = threading.Thread(target=writer)
        w.start()
        release.set()
        r.join()
        w.join()

        assert order == ["read", "write"]

    def test_waiting_writer_blocks_new_readers(self):
        lock = ReadWriteLock()
        order = []
        reading = threading.Event()
        release = threading.Event()

        def first_reader():
            with lock.read_locked():
                reading.set()
                release.wait(timeout=5)
                order.append("read-1")

        def writer():
            with lock.write_locked():
                order.append("write")

        def second_reader():
            with lock.read_locked():
                order.append("read-2")

        r1 = threading.Thread(target=first_reader)
        r1.start()
        reading.wait(timeout=5)
        w = threading.Thread(target=writer)
        w.start()
        deadline = time.monotonic() + 5
        while lock._writers_waiting == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert lock._writers_waiting == 1

        r2 = threading.Thread(target=second_reader)
        r2.start()
        time.sleep(0.05)
        assert order == []

        release.set()
        for t in (r1, w, r2):
            t.join(timeout=5)

        assert order == ["read-1", "write", "read-2"]
