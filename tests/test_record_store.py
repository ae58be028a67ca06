"""Tests for the record store."""

import json

import pytest

from roster.errors import NotFoundError, PersistenceError, ValidationError
from roster.persistence.memory_storage import MemoryStorage
from roster.records.record_models import Grade, RecordInput, SchoolClass
from roster.store.record_store import RecordStore


def _stored_payload(storage, key="students"):
    return json.loads(storage.read(key).decode("utf-8"))


def test_load_without_persisted_state_is_empty(storage):
    store = RecordStore(storage)
    
    assert store.load() == []
    assert len(store) == 0


def test_create_appends_and_coerces_age(store, storage):
    record = store.create({"name": "Ann", "age": "17", "class": "12th", "grade": "A"})
    
    assert record.id == 1
    assert record.name == "Ann"
    assert record.age == 17
    assert record.school_class is SchoolClass.TWELFTH
    assert record.grade is Grade.A
    assert [r.id for r in store.all()] == [1]
    assert _stored_payload(storage) == [
        {"id": 1, "name": "Ann", "age": 17, "class": "12th", "grade": "A"}
    ]


def test_create_accepts_record_input_model(store):
    record = store.create(RecordInput(name="Cy", age=20, school_class="Undergraduate", grade="C+"))
    assert record.school_class is SchoolClass.UNDERGRADUATE


@pytest.mark.parametrize("missing", ["name", "age", "class", "grade"])
def test_create_with_empty_field_raises_and_leaves_collection(seeded_store, storage, missing):
    before = seeded_store.all()
    writes_before = storage.writes
    values = {"name": "Cy", "age": "20", "class": "Other", "grade": "C"}
    values[missing] = ""
    
    with pytest.raises(ValidationError) as exc_info:
        seeded_store.create(values)
    
    assert exc_info.value.fields == [missing]
    assert seeded_store.all() == before
    assert storage.writes == writes_before


def test_create_with_non_numeric_age_raises(store):
    with pytest.raises(ValidationError) as exc_info:
        store.create({"name": "Cy", "age": "old", "class": "Other", "grade": "C"})
    
    assert exc_info.value.fields == ["age"]
    assert store.all() == []


def test_create_with_unknown_class_raises(store):
    with pytest.raises(ValidationError) as exc_info:
        store.create({"name": "Cy", "age": "20", "class": "13th", "grade": "C"})
    
    assert exc_info.value.fields == ["class"]


def test_create_assigns_unique_ids_when_factory_collides(storage):
    store = RecordStore(storage, id_factory=lambda _existing: 100)
    store.load()
    
    first = store.create({"name": "Ann", "age": "17", "class": "12th", "grade": "A"})
    second = store.create({"name": "Bo", "age": "16", "class": "11th", "grade": "B"})
    
    assert first.id == 100
    assert second.id == 101


def test_default_ids_increase(storage):
    store = RecordStore(storage)
    store.load()
    
    ids = [
        store.create({"name": f"N{i}", "age": "10", "class": "10th", "grade": "F"}).id
        for i in range(5)
    ]
    
    assert ids == sorted(ids)
    assert len(set(ids)) == 5


def test_update_replaces_in_place(seeded_store, storage):
    updated = seeded_store.update(1, {"name": "Anne", "age": "18", "class": "Undergraduate", "grade": "A+"})
    
    records = seeded_store.all()
    assert [r.id for r in records] == [1, 2]
    assert updated.id == 1
    assert records[0].name == "Anne"
    assert records[0].age == 18
    assert records[0].school_class is SchoolClass.UNDERGRADUATE
    assert records[0].grade is Grade.A_PLUS
    assert records[1].name == "Bo"
    assert _stored_payload(storage)[0]["name"] == "Anne"


def test_update_missing_id_raises_not_found(seeded_store):
    with pytest.raises(NotFoundError) as exc_info:
        seeded_store.update(99, {"name": "X", "age": "1", "class": "Other", "grade": "F"})
    
    assert exc_info.value.record_id == 99
    assert len(seeded_store) == 2


def test_update_with_empty_field_leaves_record(seeded_store):
    before = seeded_store.get(2)
    
    with pytest.raises(ValidationError):
        seeded_store.update(2, {"name": "Bob", "age": "", "class": "11th", "grade": "B"})
    
    assert seeded_store.get(2) == before


def test_delete_removes_and_is_idempotent(seeded_store, storage):
    seeded_store.delete(1)
    assert [r.id for r in seeded_store.all()] == [2]
    
    seeded_store.delete(1)
    assert [r.id for r in seeded_store.all()] == [2]
    assert [entry["id"] for entry in _stored_payload(storage)] == [2]


def test_all_returns_copies(seeded_store):
    records = seeded_store.all()
    records.pop()
    records[0].name = "Mutated"
    
    assert len(seeded_store) == 2
    assert seeded_store.get(1).name == "Ann"


def test_submit_uses_explicit_edit_target_including_zero(storage):
    store = RecordStore(storage, id_factory=lambda existing: max(existing, default=-1) + 1)
    store.load()
    zero = store.submit({"name": "Zed", "age": "30", "class": "Other", "grade": "D"})
    assert zero.id == 0
    
    updated = store.submit({"name": "Zed", "age": "31", "class": "Other", "grade": "C"}, editing_id=0)
    
    assert updated.id == 0
    assert len(store) == 1
    assert store.get(0).age == 31


def test_reload_round_trip(seeded_store, storage, sequential_ids):
    seeded_store.update(2, {"name": "Bo", "age": "17", "class": "12th", "grade": "B+"})
    
    reloaded = RecordStore(storage, id_factory=sequential_ids)
    
    assert reloaded.load() == seeded_store.all()


def test_malformed_state_loads_as_empty():
    storage = MemoryStorage({"students": b"{not json"})
    store = RecordStore(storage)
    
    assert store.load() == []


def test_custom_key_is_used(storage):
    store = RecordStore(storage, key="class-of-2025")
    store.load()
    store.create({"name": "Ann", "age": "17", "class": "12th", "grade": "A"})
    
    assert storage.read("students") is None
    assert storage.read("class-of-2025") is not None


class _FailingStorage(MemoryStorage):
    def write(self, key, value):
        raise PersistenceError("quota exceeded")


def test_persistence_failure_propagates_after_memory_change():
    store = RecordStore(_FailingStorage(), id_factory=lambda _existing: 7)
    store.load()
    
    with pytest.raises(PersistenceError):
        store.create({"name": "Ann", "age": "17", "class": "12th", "grade": "A"})
    
    assert [r.id for r in store.all()] == [7]


def test_create_accepts_negative_age_and_reloads_it(store, storage, sequential_ids):
    record = store.create({"name": "Ann", "age": "-1", "class": "12th", "grade": "A"})
    
    assert record.age == -1
    assert _stored_payload(storage)[0]["age"] == -1
    
    reloaded = RecordStore(storage, id_factory=sequential_ids)
    assert [r.age for r in reloaded.load()] == [-1]


def test_create_keeps_name_exactly_as_given(store, storage, sequential_ids):
    record = store.create({"name": " Ann ", "age": "17", "class": "12th", "grade": "A"})
    
    assert record.name == " Ann "
    assert RecordStore(storage, id_factory=sequential_ids).load()[0].name == " Ann "


def test_create_truncates_float_age_like_numeric_text(store):
    from_float = store.create({"name": "Ann", "age": 17.5, "class": "12th", "grade": "A"})
    from_text = store.create({"name": "Bo", "age": "17.5", "class": "12th", "grade": "A"})
    
    assert from_float.age == from_text.age == 17


def test_create_with_wrongly_typed_name_raises_validation_error(store):
    with pytest.raises(ValidationError) as exc_info:
        store.create({"name": 123, "age": "17", "class": "12th", "grade": "A"})
    
    assert exc_info.value.fields == ["name"]
    assert store.all() == []
