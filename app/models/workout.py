"""
Pydantic models for exercises, generator inputs and generated workout plans.
Plans and items are frozen and hold tuples: a change to a plan produces a new plan.
"""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


MuscleGroup = Literal[
    "Chest", "Back", "Shoulders", "Biceps", "Triceps", "Legs", "Glutes", "Core", "Full Body"
]
Intensity = Literal["easy", "moderate", "hard", "brutal"]
WorkoutStyle = Literal["traditional", "circuit", "superset", "amrap"]
ExerciseType = Literal["weights", "cardio", "mobility"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
Location = Literal["home", "gym", "hotel", "outdoors"]
SectionKey = Literal["stretching", "main"]

BODYWEIGHT = "Bodyweight"


class Exercise(BaseModel):
    """Single entry of the exercise library."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    muscles: list[MuscleGroup] = []
    equipment: list[str] = []
    type: ExerciseType
    difficulty: Difficulty = "beginner"
    defaultRepRange: str
    youtubeUrl: str = ""
    instructions: Optional[list[str]] = None
    imageUrl: Optional[str] = None
    unilateral: Optional[bool] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_muscles(self) -> "Exercise":
        if not self.muscles and self.type != "cardio":
            raise ValueError(f"Exercise {self.id} must target at least one muscle group")
        return self


class WorkoutInputs(BaseModel):
    """Normalized generator inputs. Preconditions are checked by the caller."""

    selectedMuscles: list[MuscleGroup]
    equipment: list[str]
    intensity: Intensity = "moderate"
    cardioWeightSplit: int = Field(default=30, description="Percent of main time spent on cardio")
    durationMinutes: int = 30
    workoutStyle: WorkoutStyle = "traditional"
    stretchingMinutes: int = 5
    stretchingOnly: bool = False
    otherNotes: Optional[str] = None


class WorkoutItem(BaseModel):
    """One line of a generated plan."""

    model_config = ConfigDict(frozen=True)

    name: str
    sets: int
    target: str
    restSeconds: Optional[int] = None
    youtubeUrl: str = ""
    instructions: Optional[tuple[str, ...]] = None
    imageUrl: Optional[str] = None
    circuitId: Optional[str] = None
    circuitRounds: Optional[int] = None
    muscles: Optional[tuple[MuscleGroup, ...]] = None
    exerciseId: Optional[str] = None


class WorkoutSection(BaseModel):
    """Ordered list of items under a title."""

    model_config = ConfigDict(frozen=True)

    title: str
    items: tuple[WorkoutItem, ...] = ()


class WorkoutSections(BaseModel):
    model_config = ConfigDict(frozen=True)

    stretching: WorkoutSection
    main: WorkoutSection


class WorkoutSummary(BaseModel):
    """Human-readable description of the request a plan was built from."""

    model_config = ConfigDict(frozen=True)

    title: str
    muscles: str
    equipment: str
    intensity: str
    cardioPercent: int
    weightsPercent: int
    workoutStyle: WorkoutStyle
    stretchingMinutes: Optional[int] = None
    stretchingOnly: Optional[bool] = None


class WorkoutPlan(BaseModel):
    """Generated workout plan."""

    model_config = ConfigDict(frozen=True)

    summary: WorkoutSummary
    sections: WorkoutSections
