from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from marketplace.domain.instances.schemas import InstanceCreate, InstanceUpdate
from marketplace.domain.instances.service import InstanceService, is_full_for
from marketplace.models import PriceMod, RetreatInstance

START = datetime(2027, 3, 1, 9, 0)


def make_create(parent_id, **overrides):
    payload = {
        "parentId": parent_id,
        "startDate": START,
        "endDate": START + timedelta(days=5),
        "availableSlots": 8,
    }
    payload.update(overrides)
    return InstanceCreate(**payload)


@pytest.mark.parametrize(
    "slots,flag,expected",
    [(0, False, True), (0, True, True), (3, False, False), (3, True, True)],
)
def test_is_full_for(slots, flag, expected):
    assert is_full_for(slots, flag) is expected


class TestCreateInstance:
    def test_creates_retreat_instance(self, db, factory):
        retreat = factory.retreat(factory.property())

        created = InstanceService(db).create_instance("retreat", make_create(retreat.id, duration=5))

        assert created.parent_id == retreat.id
        assert created.available_slots == 8
        assert created.is_full is False
        assert created.duration == 5

    def test_zero_slots_is_full(self, db, factory):
        program = factory.program(factory.property())

        created = InstanceService(db).create_instance("program", make_create(program.id, availableSlots=0))

        assert created.is_full is True

    def test_missing_parent(self, db):
        with pytest.raises(HTTPException) as exc:
            InstanceService(db).create_instance("retreat", make_create("ghost"))

        assert exc.value.status_code == 404

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            make_create("any", endDate=START - timedelta(days=1))

    def test_negative_slots_rejected(self):
        with pytest.raises(ValidationError):
            make_create("any", availableSlots=-1)

    def test_aware_dates_stored_as_naive_utc(self):
        data = make_create(
            "any",
            startDate=datetime(2027, 3, 1, 11, 0, tzinfo=timezone(timedelta(hours=2))),
            endDate=datetime(2027, 3, 2, 9, 0, tzinfo=timezone.utc),
        )

        assert data.startDate == datetime(2027, 3, 1, 9, 0)
        assert data.endDate.tzinfo is None


class TestUpdateInstance:
    def test_selling_out_marks_full(self, db, factory):
        instance = factory.retreat_instance(factory.retreat(factory.property()))

        updated = InstanceService(db).update_instance(
            "retreat", instance.id, InstanceUpdate(availableSlots=0)
        )

        assert updated.available_slots == 0
        assert updated.is_full is True

    def test_full_flag_survives_restock_until_cleared(self, db, factory):
        instance = factory.retreat_instance(factory.retreat(factory.property()), available_slots=0, is_full=True)
        service = InstanceService(db)

        restocked = service.update_instance("retreat", instance.id, InstanceUpdate(availableSlots=4))
        cleared = service.update_instance("retreat", instance.id, InstanceUpdate(isFull=False))

        assert restocked.is_full is True
        assert cleared.is_full is False
        assert cleared.available_slots == 4

    def test_partial_update_keeps_other_fields(self, db, factory):
        instance = factory.program_instance(factory.program(factory.property()), notes="Bring a mat")

        updated = InstanceService(db).update_instance(
            "program", instance.id, InstanceUpdate(itinerary="Arrive;Breathe;Depart;")
        )

        assert updated.itinerary == "Arrive;Breathe;Depart;"
        assert updated.notes == "Bring a mat"

    def test_end_before_existing_start(self, db, factory):
        instance = factory.retreat_instance(factory.retreat(factory.property()))

        with pytest.raises(HTTPException) as exc:
            InstanceService(db).update_instance(
                "retreat", instance.id, InstanceUpdate(endDate=datetime(2026, 10, 1))
            )

        assert exc.value.status_code == 422
        db.refresh(instance)
        assert instance.end_date == datetime(2026, 11, 8)

    def test_missing_instance(self, db):
        with pytest.raises(HTTPException) as exc:
            InstanceService(db).update_instance("program", "ghost", InstanceUpdate(notes="x"))

        assert exc.value.status_code == 404


class TestReadAndDeleteInstances:
    def test_get_instance(self, db, factory):
        program = factory.program(factory.property())
        instance = factory.program_instance(program, notes="Quiet week")

        found = InstanceService(db).get_instance("program", instance.id)

        assert found.id == instance.id
        assert found.parent_id == program.id
        assert found.notes == "Quiet week"

    def test_get_missing_instance(self, db):
        with pytest.raises(HTTPException) as exc:
            InstanceService(db).get_instance("retreat", "ghost")

        assert exc.value.status_code == 404

    def test_list_is_paginated_newest_first(self, db, factory):
        retreat = factory.retreat(factory.property())
        other = factory.retreat(factory.property(name="Other Lodge"))
        for month in (1, 2, 3):
            factory.retreat_instance(
                retreat, start_date=datetime(2027, month, 1), end_date=datetime(2027, month, 5)
            )
        factory.retreat_instance(other)
        service = InstanceService(db)

        first = service.list_instances("retreat", parent_id=retreat.id, page=1, page_size=2)
        second = service.list_instances("retreat", parent_id=retreat.id, page=2, page_size=2)
        everything = service.list_instances("retreat")

        assert [i.start_date.month for i in first.instances] == [3, 2]
        assert [i.start_date.month for i in second.instances] == [1]
        assert (first.total_instances, first.total_pages, second.current_page) == (3, 2, 2)
        assert everything.total_instances == 4

    def test_list_of_nothing(self, db):
        empty = InstanceService(db).list_instances("program", parent_id="ghost")

        assert empty.instances == []
        assert empty.total_pages == 0

    def test_delete_removes_attached_price_mods(self, db, factory):
        retreat = factory.retreat(factory.property())
        instance = factory.retreat_instance(retreat)
        factory.price_mod(name="Week rate", retreat_instance_id=instance.id)
        kept_id = factory.price_mod(name="Cleaning", type="FEE", retreat_id=retreat.id).id
        instance_id = instance.id

        InstanceService(db).delete_instance("retreat", instance_id)

        assert db.query(RetreatInstance).filter(RetreatInstance.id == instance_id).first() is None
        assert [m.id for m in db.query(PriceMod).all()] == [kept_id]

    def test_delete_missing_instance(self, db):
        with pytest.raises(HTTPException) as exc:
            InstanceService(db).delete_instance("program", "ghost")

        assert exc.value.status_code == 404
