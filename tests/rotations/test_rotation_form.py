from __future__ import annotations

from datetime import date

import pytest

from src.pointage_system.pointage_system.core.exceptions import ValidationError
from src.pointage_system.pointage_system.rotations.form import BusForm, DateForm, PointageForm


def _form() -> PointageForm:
    return (
        PointageForm()
        .with_identity(nom="Karim", telephone="0612", hotel="Ibis")
        .add_date(date(2024, 3, 10))
        .add_date(date(2024, 3, 11))
    )


def test_edits_return_new_forms_and_leave_the_original_untouched():
    original = _form()

    edited = original.update_bus(0, 0, "matricule", "BUS-1")

    assert original.pointages[0].buses[0].matricule == ""
    assert edited.pointages[0].buses[0].matricule == "BUS-1"
    assert edited is not original


def test_new_date_starts_with_one_empty_bus():
    form = PointageForm().add_date(date(2024, 3, 10))

    assert form.pointages == (DateForm(date="2024-03-10", buses=(BusForm(matricule="", rotations=1),)),)


def test_add_and_remove_bus():
    form = _form().add_bus(1).update_bus(1, 1, "rotations", 4)

    assert [b.rotations for b in form.pointages[1].buses] == [1, 4]
    assert len(form.remove_bus(1, 0).pointages[1].buses) == 1


def test_remove_date():
    form = _form().remove_date(0)

    assert [d.date for d in form.pointages] == ["2024-03-11"]


def test_update_date_to_free_day():
    form = _form().update_date(1, "2024-03-12")

    assert [d.date for d in form.pointages] == ["2024-03-10", "2024-03-12"]


def test_update_date_to_existing_day_is_rejected_by_default():
    form = _form()

    with pytest.raises(ValidationError, match="existe déjà"):
        form.update_date(1, "2024-03-10")


def test_update_date_with_merge_appends_buses_to_existing_day():
    form = _form().update_bus(0, 0, "matricule", "A").update_bus(1, 0, "matricule", "B")

    merged = form.update_date(1, "2024-03-10", merge=True)

    assert len(merged.pointages) == 1
    assert [b.matricule for b in merged.pointages[0].buses] == ["A", "B"]


def test_unknown_bus_field_is_refused():
    with pytest.raises(ValueError):
        _form().update_bus(0, 0, "couleur", "rouge")


def test_out_of_range_index_raises_index_error():
    with pytest.raises(IndexError):
        _form().remove_date(5)
    with pytest.raises(IndexError):
        _form().remove_bus(0, 3)


def test_payload_and_validation_match_ingestion_rules():
    form = _form().update_bus(0, 0, "matricule", "BUS-1").update_bus(1, 0, "matricule", "BUS-2")

    assert form.to_payload()["pointages"][1] == {"date": "2024-03-11", "buses": [{"matricule": "BUS-2", "rotations": 1}]}
    submission = form.validate()
    assert submission.submitter.hotel == "Ibis"
    assert len(submission.dates) == 2


def test_validation_fails_while_a_bus_has_no_matricule():
    with pytest.raises(ValidationError):
        _form().validate()


def test_reset_clears_everything():
    assert _form().reset() == PointageForm()
