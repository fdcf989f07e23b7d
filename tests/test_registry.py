import threading

import pytest
from pydantic import ValidationError

from taxpayer_registry.core.errors import DuplicateTaxPayerError
from taxpayer_registry.core.registry import TaxPayerRegistry
from taxpayer_registry.schemas.taxpayer import TaxPayer

ANA = ("T001", "Ana", "Lee", "1 Main St")
BO = ("T002", "Bo", "Kim", "2 Oak Ave")


def record(tid, first_name, last_name, address):
    return TaxPayer(tid=tid, firstName=first_name, lastName=last_name, address=address)


def test_fresh_registry_is_empty(registry):
    assert registry.list() == []
    assert registry.lookup("T001") is None
    assert registry.lookup("") is None
    assert len(registry) == 0


def test_insert_then_list(registry):
    registry.insert(*ANA)
    assert registry.list() == [record(*ANA)]


def test_insert_then_lookup(registry):
    registry.insert(*ANA)
    registry.insert(*BO)

    assert registry.lookup("T002") == record(*BO)
    assert registry.lookup("T001").first_name == "Ana"


def test_lookup_miss_after_inserts(registry):
    registry.insert(*ANA)
    assert registry.lookup("T999") is None


def test_lookup_is_case_sensitive(registry):
    registry.insert("abc", "Ana", "Lee", "1 Main St")
    assert registry.lookup("ABC") is None
    assert registry.lookup("abc ") is None
    assert registry.lookup("abc") is not None


def test_list_keeps_insertion_order(registry):
    tids = [f"T{n:03d}" for n in (5, 1, 9, 3, 7)]
    for tid in tids:
        registry.insert(tid, "First", "Last", "Somewhere")

    assert [r.tid for r in registry.list()] == tids


def test_repeated_reads_are_identical(registry):
    registry.insert(*ANA)
    registry.insert(*BO)

    assert registry.list() == registry.list()
    assert registry.lookup("T001") == registry.lookup("T001")
    assert registry.lookup("T404") == registry.lookup("T404")


def test_list_returns_a_copy(registry):
    registry.insert(*ANA)
    snapshot = registry.list()
    snapshot.clear()

    assert len(registry.list()) == 1


def test_empty_strings_are_stored_unchanged(registry):
    registry.insert("", "", "", "")
    assert registry.lookup("") == record("", "", "", "")
    assert len(registry) == 1


def test_duplicate_append_keeps_both_and_lookup_returns_newest(registry):
    registry.insert("T001", "Ana", "Lee", "1 Main St")
    registry.insert("T001", "Ana", "Lee", "9 Elm Rd")

    assert [r.address for r in registry.list()] == ["1 Main St", "9 Elm Rd"]
    assert registry.lookup("T001").address == "9 Elm Rd"


def test_duplicate_reject_leaves_registry_unchanged():
    registry = TaxPayerRegistry(duplicate_policy="reject")
    registry.insert("T001", "Ana", "Lee", "1 Main St")

    with pytest.raises(DuplicateTaxPayerError) as excinfo:
        registry.insert("T001", "Ana", "Lee", "9 Elm Rd")

    assert excinfo.value.tid == "T001"
    assert registry.lookup("T001").address == "1 Main St"
    assert len(registry) == 1


def test_unknown_policy_is_refused():
    with pytest.raises(ValueError):
        TaxPayerRegistry(duplicate_policy="overwrite")


def test_records_are_immutable(registry):
    registry.insert(*ANA)
    with pytest.raises(ValidationError):
        registry.lookup("T001").address = "elsewhere"


def test_concurrent_inserts_all_land(registry):
    per_thread = 50
    threads = [
        threading.Thread(
            target=lambda n=n: [registry.insert(f"T{n}-{i}", "F", "L", "A") for i in range(per_thread)]
        )
        for n in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = registry.list()
    assert len(records) == 8 * per_thread
    assert all(registry.lookup(r.tid) == r for r in records)
    # each thread's own inserts keep their relative order
    thread_3 = [r.tid for r in records if r.tid.startswith("T3-")]
    assert thread_3 == [f"T3-{i}" for i in range(per_thread)]


def test_readers_never_see_partial_inserts(registry):
    writers_done = threading.Event()
    problems = []

    def write(n):
        for i in range(200):
            registry.insert(f"W{n}-{i}", f"First{i}", f"Last{i}", f"{i} Main St")

    def read():
        while True:
            finished = writers_done.is_set()
            for r in registry.list():
                found = registry.lookup(r.tid)
                if found is None or not all((found.tid, found.first_name, found.last_name, found.address)):
                    problems.append(r.tid)
            if finished:
                return

    readers = [threading.Thread(target=read) for _ in range(4)]
    writers = [threading.Thread(target=write, args=(n,)) for n in range(4)]
    for t in readers + writers:
        t.start()
    for t in writers:
        t.join()
    writers_done.set()
    for t in readers:
        t.join()

    assert problems == []
    assert len(registry) == 800
