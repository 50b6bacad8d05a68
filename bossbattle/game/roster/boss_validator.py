"""Boss submission validation.

Checks a character definition against the workshop rules before it may join
a roster. The engine itself never validates; anything that reaches it is
assumed to have passed here.
"""

from dataclasses import dataclass
from typing import Optional

from ...core.data import CharacterDefinition
from ..battle.battle_rules import DEFAULT_RULES, BattleRules

# Placeholders left in the boss template handed out to students
NAME_PLACEHOLDER = "BOSS_NAME"
STORY_PLACEHOLDER = "Write your boss story here"


@dataclass(frozen=True)
class ValidationError:
    """One problem with a submission, keyed by the offending field."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def validate_boss(definition: CharacterDefinition, rules: Optional[BattleRules] = None) -> list[ValidationError]:
    """Collect every rule a definition breaks.

    Args:
        definition: The submitted boss
        rules: Rules providing the stat budget and special id range

    Returns:
        All validation errors, empty when the boss is valid
    """
    rules = rules or DEFAULT_RULES
    errors: list[ValidationError] = []

    name = definition.name.strip()
    if not name or name == NAME_PLACEHOLDER:
        errors.append(ValidationError("name", "Please provide a unique boss name"))

    for field_name, label, value in (
        ("hp", "HP", definition.max_hp),
        ("attack", "Attack", definition.base_attack),
        ("speed", "Speed", definition.base_speed),
    ):
        if value <= 0:
            errors.append(ValidationError(field_name, f"{label} must be greater than 0"))

    total = definition.stat_total
    if total > rules.max_stat_points:
        errors.append(
            ValidationError(
                "stats",
                f"Total stats ({total}) exceed maximum of {rules.max_stat_points}. "
                f"Current: HP({definition.max_hp}) + Attack({definition.base_attack}) "
                f"+ Speed({definition.base_speed})",
            )
        )

    if not rules.min_special_move_id <= definition.special_move_id <= rules.max_special_move_id:
        errors.append(
            ValidationError(
                "special_id",
                f"Special move ID must be between {rules.min_special_move_id} and {rules.max_special_move_id}",
            )
        )

    story = definition.story.strip()
    if not story or story == STORY_PLACEHOLDER:
        errors.append(ValidationError("story", "Please write a unique story for your boss"))

    return errors
