"""Unit tests for the local JSON-file backend."""

import json
from datetime import date, datetime, timezone

import pytest

from seiva.persistence.local import JsonCollection, create_local_backend
from seiva.schemas.student import Student
from seiva.services.school_data import SchoolDataStore


@pytest.mark.asyncio
async def test_missing_files_load_empty(tmp_path):
    backend = create_local_backend(tmp_path / "data")
    assert await backend.students.load_all() == []
    assert await backend.transactions.load_all() == []
    assert await backend.events.load_all() == []
    assert await backend.employees.load_all() == []


@pytest.mark.asyncio
async def test_records_are_camel_case_json(tmp_path, make_student):
    backend = create_local_backend(tmp_path)
    student = make_student(enrollment_id="#2026-007", paid_months=["February"])
    assert await backend.students.insert(student) is True

    records = json.loads((tmp_path / "students.json").read_text(encoding="utf-8"))
    assert records[0]["id"] == student.id
    assert records[0]["enrollmentId"] == "#2026-007"
    assert records[0]["paidMonths"] == ["February"]
    assert records[0]["financialStatus"] == "pending"
    assert not (tmp_path / "students.json.tmp").exists()


@pytest.mark.asyncio
async def test_round_trip_preserves_fields(tmp_path, make_transaction, make_event, make_employee):
    backend = create_local_backend(tmp_path)
    tx = make_transaction(
        student_id="s1",
        paid_months=["February", "March"],
        attachment="data:application/pdf;base64,JVBERi0xLjQK",
    )
    event = make_event(start=datetime(2026, 3, 20, 8, 0, tzinfo=timezone.utc))
    employee = make_employee(personal={"nuit": "123456789"}, bank={"iban": "MZ59 0001"})

    await backend.transactions.insert(tx)
    await backend.events.insert(event)
    await backend.employees.insert(employee)

    assert (await backend.transactions.load_all()) == [tx]
    assert (await backend.events.load_all()) == [event]
    assert (await backend.employees.load_all()) == [employee]
    loaded_tx = (await backend.transactions.load_all())[0]
    assert loaded_tx.date == date(2026, 3, 10)


@pytest.mark.asyncio
async def test_insert_order_per_collection(tmp_path, make_student, make_event):
    backend = create_local_backend(tmp_path)
    s1, s2 = make_student(name="Primeiro"), make_student(name="Segundo")
    e1, e2 = make_event(title="Abertura"), make_event(title="Provas")
    for student in (s1, s2):
        await backend.students.insert(student)
    for event in (e1, e2):
        await backend.events.insert(event)

    assert [s.id for s in await backend.students.load_all()] == [s2.id, s1.id]
    assert [e.id for e in await backend.events.load_all()] == [e1.id, e2.id]


@pytest.mark.asyncio
async def test_duplicate_insert_rejected(tmp_path, make_student):
    backend = create_local_backend(tmp_path)
    student = make_student()
    assert await backend.students.insert(student) is True
    assert await backend.students.insert(student) is False
    assert len(await backend.students.load_all()) == 1


@pytest.mark.asyncio
async def test_update_and_unknown_update(tmp_path, make_student):
    backend = create_local_backend(tmp_path)
    student = make_student()
    await backend.students.insert(student)

    assert await backend.students.update(student.model_copy(update={"grade": "6ª Classe"})) is True
    assert (await backend.students.load_all())[0].grade == "6ª Classe"
    assert await backend.students.update(make_student(id="ghost")) is False


@pytest.mark.asyncio
async def test_delete_only_for_events(tmp_path, make_event, make_student):
    backend = create_local_backend(tmp_path)
    event = make_event()
    await backend.events.insert(event)
    assert await backend.events.delete(event.id) is True
    assert await backend.events.delete(event.id) is False
    assert await backend.events.load_all() == []

    assert await backend.students.delete("anything") is False


@pytest.mark.asyncio
async def test_non_array_file_fails_load(tmp_path):
    path = tmp_path / "students.json"
    path.write_text('{"not": "a list"}', encoding="utf-8")
    with pytest.raises(ValueError):
        await JsonCollection(path, Student).load_all()


@pytest.mark.asyncio
async def test_store_over_local_backend(tmp_path, policy, make_student, make_transaction):
    """Data written through one store is what the next store loads."""
    backend = create_local_backend(tmp_path)
    store = SchoolDataStore(backend, policy)
    await store.refresh()
    student = await store.add_student(make_student())
    await store.add_transaction(
        make_transaction(student_id=student.id, paid_months=["February", "March", "April"])
    )
    await store.close()

    reopened = SchoolDataStore(create_local_backend(tmp_path), policy)
    await reopened.refresh()
    assert reopened.get_student(student.id).paid_months == ["February", "March", "April"]
    assert reopened.get_student(student.id).financial_status.value == "paid"
    assert len(reopened.transactions) == 1
