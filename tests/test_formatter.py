"""
Tests for plain-text plan rendering.
"""
from app.models.workout import WorkoutItem, WorkoutPlan, WorkoutSection, WorkoutSections, WorkoutSummary
from app.services.formatter import format_section, plan_to_text


def make_plan():
    return WorkoutPlan(
        summary=WorkoutSummary(
            title="Your 20-minute workout",
            muscles="Legs",
            equipment="Bodyweight",
            intensity="Hard",
            cardioPercent=20,
            weightsPercent=80,
            workoutStyle="circuit",
        ),
        sections=WorkoutSections(
            stretching=WorkoutSection(
                title="Stretching (5 min)",
                items=[WorkoutItem(name="Hamstring Stretch", sets=1, target="30s each side")],
            ),
            main=WorkoutSection(
                title="Main Workout (15 min)",
                items=[
                    WorkoutItem(name="Walking Lunge", sets=1, target="10-12 reps", restSeconds=20,
                                circuitId="circuit-1", circuitRounds=3,
                                youtubeUrl="https://www.youtube.com/watch?v=lunge"),
                    WorkoutItem(name="Calf Raise", sets=4, target="15-20 reps", restSeconds=45),
                ],
            ),
        ),
    )


class TestFormatSection:
    """Tests for section rendering."""

    def test_title_underline(self):
        text = format_section(WorkoutSection(title="Stretching (5 min)", items=[]))

        assert text == "Stretching (5 min)\n------------------\n"

    def test_item_lines(self):
        text = format_section(make_plan().sections.main)

        assert "1. Walking Lunge\n   10-12 reps\n   Circuit: circuit-1 (3 rounds)\n   Rest: 20s\n" in text
        assert "   YouTube: https://www.youtube.com/watch?v=lunge\n" in text
        assert "2. Calf Raise\n   4 sets × 15-20 reps\n   Rest: 45s\n\n" in text

    def test_no_rest_line_for_zero_rest(self):
        section = WorkoutSection(title="Main", items=[
            WorkoutItem(name="🔗 Push-up", sets=3, target="10 reps", restSeconds=0),
        ])

        assert "Rest" not in format_section(section)


class TestPlanToText:
    """Tests for full plan rendering."""

    def test_header_and_sections(self):
        text = plan_to_text(make_plan())

        assert text.startswith("Your 20-minute workout\n\n")
        assert "Muscles: Legs\n" in text
        assert "Equipment: Bodyweight\n" in text
        assert "Intensity: Hard\n" in text
        assert "Split: Cardio 20% / Weights 80%\n" in text
        assert text.index("Stretching (5 min)") < text.index("Main Workout (15 min)")
        assert "1. Hamstring Stretch\n   30s each side\n" in text
