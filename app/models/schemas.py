"""
Pydantic models for request/response validation.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from app.models.workout import (
    Exercise,
    Location,
    SectionKey,
    WorkoutInputs,
    WorkoutPlan,
)


# --- Generation Models ---

class WorkoutRequest(WorkoutInputs):
    """
    Request model for workout generation.

    Enforces the preconditions the generator relies on: at least one muscle,
    at least one piece of equipment and stretching that fits in the session.
    """

    location: Optional[Location] = Field(None, description="Fills equipment from a preset when equipment is empty")
    equipment: list[str] = Field(default=[], description="Available equipment")
    cardioWeightSplit: int = Field(default=30, ge=0, le=100)
    durationMinutes: int = Field(default=30, ge=5, le=180)
    stretchingMinutes: int = Field(default=5, ge=0, le=60)
    otherNotes: Optional[str] = Field(None, max_length=500)

    model_config = {
        "json_schema_extra": {
            "example": {
                "location": "home",
                "selectedMuscles": ["Chest", "Back"],
                "equipment": ["Bodyweight", "Dumbbells"],
                "intensity": "moderate",
                "cardioWeightSplit": 30,
                "durationMinutes": 30,
                "workoutStyle": "traditional",
                "stretchingMinutes": 5,
                "stretchingOnly": False
            }
        }
    }

    @model_validator(mode="after")
    def check_preconditions(self) -> "WorkoutRequest":
        if not self.selectedMuscles:
            raise ValueError("Please select at least one muscle group")
        if not self.equipment and self.location is None:
            raise ValueError("Please select at least one equipment option")
        if not self.stretchingOnly and self.stretchingMinutes > self.durationMinutes:
            raise ValueError("Stretching time cannot exceed total duration")
        return self

    def to_inputs(self, preset_equipment: Optional[list[str]] = None) -> WorkoutInputs:
        """Normalize into generator inputs; stretching-only sessions have no cardio split."""
        equipment = self.equipment or preset_equipment or []
        return WorkoutInputs(
            selectedMuscles=self.selectedMuscles,
            equipment=equipment,
            intensity=self.intensity,
            cardioWeightSplit=0 if self.stretchingOnly else self.cardioWeightSplit,
            durationMinutes=self.durationMinutes,
            workoutStyle=self.workoutStyle,
            stretchingMinutes=self.stretchingMinutes,
            stretchingOnly=self.stretchingOnly,
            otherNotes=self.otherNotes,
        )


class WorkoutAPIResponse(BaseModel):
    """API wrapper response for workout endpoint."""

    status: str = "success"
    plan: WorkoutPlan


class WorkoutTextResponse(BaseModel):
    text: str


# --- Swap Models ---

class SwapOptionsRequest(BaseModel):
    """Which item of a plan to find substitutes for."""

    plan: WorkoutPlan
    section: SectionKey
    index: int = Field(..., ge=0)
    equipment: list[str] = Field(..., min_length=1)


class SwapOptionsResponse(BaseModel):
    options: list[Exercise]


class SwapRequest(BaseModel):
    """Replace one item of a plan with a catalog exercise."""

    plan: WorkoutPlan
    section: SectionKey
    index: int = Field(..., ge=0)
    exerciseId: str


# --- Saved Workout Models ---

class SaveWorkoutRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    plan: WorkoutPlan


class SavedWorkoutOut(BaseModel):
    """Workout saved to a user's account."""

    id: str
    userId: str
    name: str
    plan: WorkoutPlan
    savedAt: datetime


# --- Share Models ---

class ShareResponse(BaseModel):
    shortId: str


class SharedWorkoutResponse(BaseModel):
    workout: WorkoutPlan


# --- Performance Models ---

class PerformanceLogRequest(BaseModel):
    """Request model for logging an exercise performance."""

    exerciseName: str = Field(..., min_length=1)
    exerciseId: Optional[str] = None
    weight: float = Field(..., ge=0)
    reps: int = Field(..., ge=1)
    sets: int = Field(default=1, ge=1)
    workoutId: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)


class PerformanceOut(BaseModel):
    """Logged performance entry."""

    id: str
    userId: str
    exerciseName: str
    exerciseId: Optional[str] = None
    weight: float
    reps: int
    sets: int
    date: datetime
    workoutId: Optional[str] = None
    notes: Optional[str] = None


class ExerciseHistoryEntry(BaseModel):
    id: str
    weight: float
    reps: int
    sets: int
    date: datetime


class ExerciseHistory(BaseModel):
    """Best distinct weights and session count for one exercise."""

    exerciseName: str
    topWeights: list[ExerciseHistoryEntry]
    totalSessions: int
    personalRecord: float


# --- Generic Response Models ---

class SuccessResponse(BaseModel):
    """Generic success response wrapper."""
    success: bool = True


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
