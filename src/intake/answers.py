"""
Answer Store.

Holds the evolving user input for one wizard session. No sequencing logic
lives here; the store only keeps answers consistent (no duplicate tags,
detected ingredients written by the merge resolver only).
"""

from dataclasses import asdict, dataclass, field

# Allergy sentinel that unlocks the free-text field
OTHER_ALLERGY = "Other"

# Saved-diet sentinel meaning "no protocol"
NO_DIET = "None"

MULTI_SELECT_FIELDS = ("mood", "flavor", "temperature", "texture", "protocols", "allergies")
TEXT_FIELDS = ("other_allergy", "ingredients")


@dataclass
class AnswerRecord:
    """
    Accumulated answers for one session.

    Multi-select fields are duplicate-free lists. Order is kept only for
    stable display; membership is what matters.

    `detected_ingredients` belongs to the IngredientMergeResolver and is
    never edited by the user.
    """
    mood: list[str] = field(default_factory=list)
    flavor: list[str] = field(default_factory=list)
    temperature: list[str] = field(default_factory=list)
    texture: list[str] = field(default_factory=list)
    protocols: list[str] = field(default_factory=list)
    allergies: list[str] = field(default_factory=list)
    other_allergy: str = ""
    ingredients: str = ""
    detected_ingredients: str = ""

    def toggle(self, field_name: str, value: str) -> bool:
        """
        Add value if absent, remove it if present.

        Returns True if the value is selected after the toggle.
        """
        values = self.selected(field_name)
        if value in values:
            values.remove(value)
            return False
        values.append(value)
        return True

    def selected(self, field_name: str) -> list[str]:
        """Return the live list behind a multi-select field."""
        if field_name not in MULTI_SELECT_FIELDS:
            raise ValueError(f"Not a multi-select field: {field_name}")
        return getattr(self, field_name)

    def set_text(self, field_name: str, value: str) -> None:
        """Set a user-editable text field."""
        if field_name not in TEXT_FIELDS:
            raise ValueError(f"Not a user-editable text field: {field_name}")
        setattr(self, field_name, value or "")

    def record_detected_ingredients(self, text: str) -> None:
        """Write scan output. Only the merge resolver calls this."""
        self.detected_ingredients = text

    @property
    def has_other_allergy(self) -> bool:
        return OTHER_ALLERGY in self.allergies

    def clear(self) -> None:
        """Reset every field to empty."""
        for name in MULTI_SELECT_FIELDS:
            getattr(self, name).clear()
        self.other_allergy = ""
        self.ingredients = ""
        self.detected_ingredients = ""

    def to_dict(self) -> dict:
        """Serialize for snapshots."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "AnswerRecord":
        """Deserialize, dropping duplicate tags."""
        record = cls()
        for name in MULTI_SELECT_FIELDS:
            for value in data.get(name) or []:
                if value not in getattr(record, name):
                    getattr(record, name).append(value)
        record.other_allergy = data.get("other_allergy", "") or ""
        record.ingredients = data.get("ingredients", "") or ""
        record.detected_ingredients = data.get("detected_ingredients", "") or ""
        return record
