"""Exercise catalog entries and generated plan exercises."""

from dataclasses import dataclass, field
from enum import Enum


class ExerciseCategory(str, Enum):
    """Catalog category of an exercise."""

    STRENGTH = "strength"
    CARDIO = "cardio"


class ExerciseType(str, Enum):
    """Role an exercise plays inside a plan."""

    WARMUP = "warmup"
    STRENGTH = "strength"
    CARDIO = "cardio"


class MuscleGroup(str, Enum):
    """Muscle tags used by the built-in catalog."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABS = "abs"
    OBLIQUES = "obliques"
    LOWER_BACK = "lower_back"
    TRAPS = "traps"
    LATS = "lats"
    FULL_BODY = "full_body"


class FocusArea(str, Enum):
    """User-selectable focus areas for plan generation."""

    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    CORE = "core"
    ARMS = "arms"
    SHOULDERS = "shoulders"


class EquipmentType(str, Enum):
    """Equipment tags used by the built-in catalog."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    KETTLEBELL = "kettlebell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    BANDS = "bands"
    JUMP_ROPE = "jump_rope"
    TREADMILL = "treadmill"
    BIKE = "bike"
    ROWER = "rower"


# Focus area -> muscle tags it covers
FOCUS_AREA_MUSCLES: dict[FocusArea, list[str]] = {
    FocusArea.CHEST: [MuscleGroup.CHEST.value],
    FocusArea.BACK: [
        MuscleGroup.BACK.value,
        MuscleGroup.LATS.value,
        MuscleGroup.TRAPS.value,
        MuscleGroup.LOWER_BACK.value,
    ],
    FocusArea.LEGS: [
        MuscleGroup.QUADS.value,
        MuscleGroup.HAMSTRINGS.value,
        MuscleGroup.GLUTES.value,
        MuscleGroup.CALVES.value,
    ],
    FocusArea.CORE: [MuscleGroup.ABS.value, MuscleGroup.OBLIQUES.value],
    FocusArea.ARMS: [
        MuscleGroup.BICEPS.value,
        MuscleGroup.TRICEPS.value,
        MuscleGroup.FOREARMS.value,
    ],
    FocusArea.SHOULDERS: [MuscleGroup.SHOULDERS.value],
}


def _tag(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _parse_category(value) -> ExerciseCategory | None:
    try:
        return ExerciseCategory(value)
    except ValueError:
        return None


@dataclass
class ExerciseTemplate:
    """A catalog exercise, independent of any plan."""

    name: str
    category: ExerciseCategory | None
    difficulty: int | None
    target_muscles: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    description: str = ""
    notes: str = ""
    id: int | None = None

    @property
    def is_valid(self) -> bool:
        """Whether the entry carries everything plan generation needs."""
        return bool(
            self.name
            and self.name.strip()
            and self.category
            and self.target_muscles
            and self.has_difficulty
        )

    @property
    def has_difficulty(self) -> bool:
        return isinstance(self.difficulty, int) and not isinstance(self.difficulty, bool)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "category": self.category.value if self.category else None,
            "difficulty": self.difficulty,
            "target_muscles": [_tag(m) for m in self.target_muscles],
            "equipment": [_tag(eq) for eq in self.equipment],
            "description": self.description,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "ExerciseTemplate":
        """Create from dictionary.

        Unknown categories become None so that catalog validation can
        drop the entry instead of failing the whole load.
        """
        return cls(
            id=id,
            name=data.get("name") or "",
            category=_parse_category(data.get("category")),
            difficulty=int(data.get("difficulty") or 1),
            target_muscles=list(data.get("target_muscles") or []),
            equipment=list(data.get("equipment") or []),
            description=data.get("description") or "",
            notes=data.get("notes") or "",
        )


@dataclass
class GeneratedExercise:
    """A plan line item with concrete training parameters."""

    name: str
    exercise_type: ExerciseType
    category: ExerciseCategory
    sets: int
    reps: int
    rest_time: int  # seconds
    difficulty: int
    target_muscles: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    notes: str = ""
    id: int | None = None
    plan_id: int | None = None

    @property
    def display_params(self) -> str:
        """Short sets x reps notation."""
        return f"{self.sets}x{self.reps}, rest {self.rest_time}s"

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "exercise_type": self.exercise_type.value,
            "category": self.category.value,
            "sets": self.sets,
            "reps": self.reps,
            "rest_time": self.rest_time,
            "difficulty": self.difficulty,
            "target_muscles": [_tag(m) for m in self.target_muscles],
            "equipment": [_tag(eq) for eq in self.equipment],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(
        cls, data: dict, id: int | None = None, plan_id: int | None = None
    ) -> "GeneratedExercise":
        """Create from dictionary."""
        return cls(
            id=id,
            plan_id=plan_id,
            name=data["name"],
            exercise_type=ExerciseType(data["exercise_type"]),
            category=ExerciseCategory(data["category"]),
            sets=data["sets"],
            reps=data["reps"],
            rest_time=data["rest_time"],
            difficulty=data["difficulty"],
            target_muscles=list(data.get("target_muscles", [])),
            equipment=list(data.get("equipment", [])),
            notes=data.get("notes", ""),
        )


def _strength(name, difficulty, muscles, equipment, description):
    return ExerciseTemplate(
        name=name,
        category=ExerciseCategory.STRENGTH,
        difficulty=difficulty,
        target_muscles=[m.value for m in muscles],
        equipment=[eq.value for eq in equipment],
        description=description,
    )


def _cardio(name, difficulty, muscles, equipment, description):
    return ExerciseTemplate(
        name=name,
        category=ExerciseCategory.CARDIO,
        difficulty=difficulty,
        target_muscles=[m.value for m in muscles],
        equipment=[eq.value for eq in equipment],
        description=description,
    )


M = MuscleGroup
E = EquipmentType

# Built-in exercise library, seeded into the database on init
COMMON_EXERCISES: list[ExerciseTemplate] = [
    # Chest
    _strength("Push-up", 1, [M.CHEST, M.TRICEPS, M.SHOULDERS], [E.BODYWEIGHT],
              "Hands shoulder-width apart, lower chest to the floor and press back up."),
    _strength("Bench Press", 2, [M.CHEST, M.TRICEPS, M.SHOULDERS], [E.BARBELL],
              "Lower the bar to mid-chest with control, press to lockout."),
    _strength("Incline Dumbbell Press", 2, [M.CHEST, M.SHOULDERS], [E.DUMBBELL],
              "Press dumbbells from upper chest on a 30-45 degree bench."),
    _strength("Chest Dip", 3, [M.CHEST, M.TRICEPS], [E.BODYWEIGHT],
              "Lean forward on parallel bars and dip until shoulders pass elbows."),
    # Back
    _strength("Dumbbell Row", 1, [M.BACK, M.LATS, M.BICEPS], [E.DUMBBELL],
              "Brace on a bench and row the dumbbell to the hip."),
    _strength("Lat Pulldown", 1, [M.LATS, M.BICEPS], [E.CABLE],
              "Pull the bar to the upper chest, squeezing the shoulder blades."),
    _strength("Barbell Row", 2, [M.BACK, M.LATS, M.TRAPS], [E.BARBELL],
              "Hinge to 45 degrees and row the bar to the lower ribs."),
    _strength("Pull-up", 3, [M.LATS, M.BACK, M.BICEPS], [E.BODYWEIGHT],
              "Hang at full extension and pull the chin over the bar."),
    # Legs
    _strength("Bodyweight Squat", 1, [M.QUADS, M.GLUTES], [E.BODYWEIGHT],
              "Sit back and down to parallel, keep the chest up."),
    _strength("Glute Bridge", 1, [M.GLUTES, M.HAMSTRINGS], [E.BODYWEIGHT],
              "Drive through the heels and lift the hips until the body is straight."),
    _strength("Goblet Squat", 2, [M.QUADS, M.GLUTES], [E.DUMBBELL, E.KETTLEBELL],
              "Hold the weight at the chest and squat between the knees."),
    _strength("Romanian Deadlift", 2, [M.HAMSTRINGS, M.GLUTES, M.LOWER_BACK], [E.BARBELL],
              "Hinge at the hips with soft knees until the hamstrings stretch."),
    _strength("Back Squat", 3, [M.QUADS, M.GLUTES, M.LOWER_BACK], [E.BARBELL],
              "Bar on the upper back, squat below parallel and drive up."),
    _strength("Bulgarian Split Squat", 3, [M.QUADS, M.GLUTES], [E.DUMBBELL],
              "Rear foot elevated, lower the back knee toward the floor."),
    _strength("Standing Calf Raise", 1, [M.CALVES], [E.BODYWEIGHT, E.MACHINE],
              "Rise onto the balls of the feet and lower slowly."),
    # Shoulders
    _strength("Lateral Raise", 1, [M.SHOULDERS], [E.DUMBBELL],
              "Raise dumbbells to shoulder height with a slight elbow bend."),
    _strength("Overhead Press", 2, [M.SHOULDERS, M.TRICEPS], [E.BARBELL],
              "Press the bar from the front rack to overhead lockout."),
    # Arms
    _strength("Dumbbell Curl", 1, [M.BICEPS, M.FOREARMS], [E.DUMBBELL],
              "Curl with elbows pinned to the sides."),
    _strength("Tricep Pushdown", 1, [M.TRICEPS], [E.CABLE],
              "Extend the elbows fully against the cable, control the return."),
    _strength("Close-Grip Bench Press", 3, [M.TRICEPS, M.CHEST], [E.BARBELL],
              "Hands inside shoulder width, elbows tucked."),
    # Core
    _strength("Plank", 1, [M.ABS, M.OBLIQUES], [E.BODYWEIGHT],
              "Hold a straight line from head to heels on the forearms."),
    _strength("Hanging Leg Raise", 3, [M.ABS], [E.BODYWEIGHT],
              "Hang from a bar and raise straight legs to hip height."),
    _strength("Russian Twist", 2, [M.OBLIQUES, M.ABS], [E.BODYWEIGHT],
              "Lean back with feet raised and rotate side to side."),
    # Cardio
    _cardio("Jumping Jacks", 1, [M.FULL_BODY, M.CALVES], [E.BODYWEIGHT],
            "Jump feet out while raising arms overhead, return and repeat."),
    _cardio("Brisk Walk", 1, [M.QUADS, M.CALVES], [E.TREADMILL],
            "Walk at a pace that raises the heart rate but allows talking."),
    _cardio("Stationary Bike", 1, [M.QUADS, M.HAMSTRINGS], [E.BIKE],
            "Pedal at a steady cadence with moderate resistance."),
    _cardio("High Knees", 2, [M.QUADS, M.ABS], [E.BODYWEIGHT],
            "Run in place driving the knees to hip height."),
    _cardio("Jump Rope", 2, [M.CALVES, M.SHOULDERS], [E.JUMP_ROPE],
            "Small, quick jumps on the balls of the feet."),
    _cardio("Rowing Machine", 2, [M.BACK, M.QUADS], [E.ROWER],
            "Drive with the legs, then the hips, then pull with the arms."),
    _cardio("Mountain Climbers", 2, [M.ABS, M.SHOULDERS], [E.BODYWEIGHT],
            "From a high plank, alternate driving knees to the chest."),
    _cardio("Burpees", 3, [M.FULL_BODY, M.CHEST, M.QUADS], [E.BODYWEIGHT],
            "Squat, kick back to plank, push up, jump up."),
    _cardio("Kettlebell Swing", 3, [M.GLUTES, M.HAMSTRINGS, M.LOWER_BACK], [E.KETTLEBELL],
            "Hinge and snap the hips to float the bell to chest height."),
    _cardio("Box Jumps", 3, [M.QUADS, M.GLUTES, M.CALVES], [E.BODYWEIGHT],
            "Jump onto a sturdy box, land softly, step down."),
]
