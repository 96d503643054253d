"""Prompt rendering for estimation requests."""

from health_estimator.domain.profiles import EstimationRequest, UserProfile


def build_meal_prompt(request: EstimationRequest) -> str:
    """Render the macronutrient estimation prompt."""
    profile = request.profile
    return f"""You are a nutrition expert. Estimate the macronutrients for the following meal.

User Context:
{_profile_lines(profile, include_goal=True)}

Meal Description: {request.description or ""}

Provide your estimate in the following JSON format ONLY (no additional text):
{{
  "protein": <grams>,
  "carbs": <grams>,
  "fats": <grams>,
  "calories": <number>
}}"""


def build_workout_prompt(request: EstimationRequest) -> str:
    """Render the workout calorie burn prompt."""
    profile = request.profile
    return f"""You are a fitness expert. Estimate the calories burned and suggest duration for the following workout.

User Context:
{_profile_lines(profile, include_goal=False)}

Workout Description: {request.description or ""}

Provide your estimate in the following JSON format ONLY (no additional text):
{{
  "caloriesBurned": <number>,
  "duration": <minutes>
}}"""


def build_daily_targets_prompt(request: EstimationRequest) -> str:
    """Render the personalized daily targets prompt."""
    profile = request.profile
    return f"""You are a health and fitness expert. Based on the user's profile, calculate personalized daily targets for water intake, sleep, calories, and protein.

User Profile:
{_profile_lines(profile, include_goal=True)}

Consider:
1. Water: Calculate based on weight, activity level, and general health guidelines
2. Sleep: Recommend optimal sleep hours based on age and activity level
3. Calories: Calculate TDEE (Total Daily Energy Expenditure) based on BMR and activity level, then adjust for their goal (deficit for weight loss, surplus for gain, maintenance otherwise)
4. Protein: Calculate based on weight, activity level, and goal (higher for muscle gain/active individuals)

Provide your recommendations in the following JSON format ONLY (no additional text):
{{
  "waterTarget": <milliliters>,
  "sleepTarget": <hours as decimal, e.g., 7.5>,
  "calorieTarget": <calories>,
  "proteinTarget": <grams>
}}"""


def _profile_lines(profile: UserProfile, *, include_goal: bool) -> str:
    lines = [
        f"- Weight: {_format_number(profile.weight_kg)}kg",
        f"- Height: {_format_number(profile.height_cm)}cm",
        f"- Gender: {profile.gender}",
        f"- Age: {_format_number(profile.age)}",
        f"- Activity Level: {profile.activity_level}",
    ]
    if include_goal:
        lines.append(f"- Goal: {profile.goal} weight")
    return "\n".join(lines)


def _format_number(value: float) -> str:
    """Render 70.0 as 70 so prompts stay stable across int/float inputs."""
    return f"{value:g}"
