"""
Meal set reconciliation.

Compares the meals currently stored for a plan with the full desired meal
list from an update request and splits the desired state into inserts,
in-place updates and deletions. Comparison is by identity only; order in
either list does not matter.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Sequence, Set, Optional

from app.exceptions import ServiceValidationError, UnknownMealError


class HasId(Protocol):
    id: int


class DesiredMeal(Protocol):
    id: Optional[int]


@dataclass
class MealDiff:
    to_create: List[DesiredMeal] = field(default_factory=list)
    to_update: List[DesiredMeal] = field(default_factory=list)
    to_delete: Set[int] = field(default_factory=set)

    @property
    def is_noop(self) -> bool:
        return not (self.to_create or self.to_update or self.to_delete)


def reconcile_meals(
    existing_meals: Iterable[HasId], desired_meals: Sequence[DesiredMeal]
) -> MealDiff:
    """
    Compute the create/update/delete diff for a full-replacement meal list.

    - to_create: desired meals without an id
    - to_update: desired meals whose id is one of the existing meals
    - to_delete: existing ids not referenced by any desired meal

    An empty desired list deletes every existing meal.

    Raises:
        UnknownMealError: a desired meal references an id the plan does not have
        ServiceValidationError: the same id appears twice in the desired list
    """
    existing_ids = {m.id for m in existing_meals}

    desired_ids: Set[int] = set()
    duplicates: Set[int] = set()
    for meal in desired_meals:
        if meal.id is None:
            continue
        if meal.id in desired_ids:
            duplicates.add(meal.id)
        desired_ids.add(meal.id)

    if duplicates:
        raise ServiceValidationError(
            "Each meal id may appear only once in an update",
            details={"duplicate_meal_ids": sorted(duplicates)},
        )

    unknown = desired_ids - existing_ids
    if unknown:
        raise UnknownMealError(
            "Some meals do not belong to this diet plan",
            details={"unknown_meal_ids": sorted(unknown)},
        )

    return MealDiff(
        to_create=[m for m in desired_meals if m.id is None],
        to_update=[m for m in desired_meals if m.id is not None],
        to_delete=existing_ids - desired_ids,
    )
