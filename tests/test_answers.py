"""
Tests for the Answer Store and question catalogue.
"""

import pytest

from intake.answers import AnswerRecord
from intake.forms import get_form_options, normalize_selection


class TestToggle:
    """Toggle semantics on multi-select fields."""

    def test_toggle_adds_then_removes(self):
        record = AnswerRecord()
        assert record.toggle("mood", "tired") is True
        assert record.mood == ["tired"]
        assert record.toggle("mood", "tired") is False
        assert record.mood == []

    def test_double_toggle_restores_prior_state(self):
        record = AnswerRecord(flavor=["savory", "fresh"])
        for value in ("savory", "spicy", "fresh"):
            before = list(record.flavor)
            record.toggle("flavor", value)
            record.toggle("flavor", value)
            assert sorted(record.flavor) == sorted(before)

    def test_toggle_never_duplicates(self):
        record = AnswerRecord()
        record.toggle("allergies", "Dairy")
        record.toggle("allergies", "Eggs")
        record.toggle("allergies", "Dairy")
        record.toggle("allergies", "Dairy")
        assert record.allergies.count("Dairy") == 1

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            AnswerRecord().toggle("ingredients", "eggs")


class TestText:
    """Free-text fields."""

    def test_set_text(self):
        record = AnswerRecord()
        record.set_text("ingredients", "spinach")
        record.set_text("other_allergy", "shellfish")
        assert record.ingredients == "spinach"
        assert record.other_allergy == "shellfish"

    def test_detected_ingredients_not_user_editable(self):
        with pytest.raises(ValueError):
            AnswerRecord().set_text("detected_ingredients", "eggs")

    def test_typed_and_detected_are_independent(self):
        record = AnswerRecord()
        record.record_detected_ingredients("eggs")
        record.set_text("ingredients", "spinach")
        assert record.detected_ingredients == "eggs"
        assert record.ingredients == "spinach"


class TestSerialization:

    def test_clear(self):
        record = AnswerRecord(mood=["calm"], protocols=["Keto"], ingredients="rice", detected_ingredients="eggs")
        record.clear()
        assert record == AnswerRecord()

    def test_from_dict_drops_duplicates(self):
        record = AnswerRecord.from_dict({"mood": ["calm", "calm", "tired"], "ingredients": "rice"})
        assert record.mood == ["calm", "tired"]
        assert record.to_dict()["ingredients"] == "rice"


class TestForms:
    """Option catalogue validation."""

    def test_enum_field_rejects_unknown_tag(self):
        with pytest.raises(ValueError):
            normalize_selection("mood", "ecstatic")

    def test_enum_field_accepts_known_tag(self):
        assert normalize_selection("texture", " crunchy ") == "crunchy"

    def test_free_form_field_accepts_custom_value(self):
        assert normalize_selection("protocols", "Pescatarian") == "Pescatarian"

    def test_blank_value_rejected(self):
        with pytest.raises(ValueError):
            normalize_selection("allergies", "   ")

    def test_form_options_cover_every_question(self):
        options = get_form_options()
        for key in ("mood", "flavor", "temperature", "texture", "protocols", "allergies"):
            assert options[key]
        assert "Other" in options["allergies"]
        assert "ingredients" in options["questions"]
