"""
Plain-text rendering of workout plans (the "copy to clipboard" format).
"""
from app.models.workout import WorkoutPlan, WorkoutSection


def format_section(section: WorkoutSection) -> str:
    """Render one section as a titled, numbered list."""
    text = f"{section.title}\n{'-' * len(section.title)}\n"
    for idx, item in enumerate(section.items, start=1):
        text += f"{idx}. {item.name}\n"
        prefix = f"{item.sets} sets × " if item.sets > 1 else ""
        text += f"   {prefix}{item.target}\n"
        if item.circuitId and item.circuitRounds:
            text += f"   Circuit: {item.circuitId} ({item.circuitRounds} rounds)\n"
        if item.restSeconds:
            text += f"   Rest: {item.restSeconds}s\n"
        if item.youtubeUrl:
            text += f"   YouTube: {item.youtubeUrl}\n"
        text += "\n"
    return text


def plan_to_text(plan: WorkoutPlan) -> str:
    """
    Render a plan as shareable plain text.

    Args:
        plan: Generated workout plan

    Returns:
        Summary header followed by the stretching and main sections
    """
    summary = plan.summary
    text = f"{summary.title}\n\n"
    text += f"Muscles: {summary.muscles}\n"
    text += f"Equipment: {summary.equipment}\n"
    text += f"Intensity: {summary.intensity}\n"
    text += f"Split: Cardio {summary.cardioPercent}% / Weights {summary.weightsPercent}%\n\n"

    text += format_section(plan.sections.stretching)
    text += "\n"
    text += format_section(plan.sections.main)
    return text
