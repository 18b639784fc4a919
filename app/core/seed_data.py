"""Default exercise catalog: muscle group -> [(slug, name)]."""

DEFAULT_EXERCISES: dict[str, list[tuple[str, str]]] = {
    "Chest": [
        ("bench-press", "Bench Press"),
        ("incline-bench-press", "Incline Bench Press"),
        ("decline-bench-press", "Decline Bench Press"),
        ("dumbbell-press", "Dumbbell Press"),
        ("incline-dumbbell-press", "Incline Dumbbell Press"),
        ("chest-dips", "Chest Dips"),
        ("cable-flyes", "Cable Flyes"),
        ("dumbbell-flyes", "Dumbbell Flyes"),
        ("push-ups", "Push-ups"),
    ],
    "Back": [
        ("pull-ups", "Pull-ups"),
        ("lat-pulldowns", "Lat Pulldowns"),
        ("barbell-rows", "Barbell Rows"),
        ("dumbbell-rows", "Dumbbell Rows"),
        ("t-bar-rows", "T-Bar Rows"),
        ("seated-cable-rows", "Seated Cable Rows"),
        ("face-pulls", "Face Pulls"),
        ("deadlift", "Deadlift"),
    ],
    "Legs": [
        ("squats", "Squats"),
        ("leg-press", "Leg Press"),
        ("romanian-deadlifts", "Romanian Deadlifts"),
        ("leg-extensions", "Leg Extensions"),
        ("leg-curls", "Leg Curls"),
        ("calf-raises", "Calf Raises"),
        ("lunges", "Lunges"),
        ("hack-squats", "Hack Squats"),
    ],
    "Shoulders": [
        ("overhead-press", "Overhead Press"),
        ("dumbbell-shoulder-press", "Dumbbell Shoulder Press"),
        ("lateral-raises", "Lateral Raises"),
        ("front-raises", "Front Raises"),
        ("reverse-flyes", "Reverse Flyes"),
        ("shrugs", "Shrugs"),
        ("upright-rows", "Upright Rows"),
    ],
    "Arms": [
        ("bicep-curls", "Bicep Curls"),
        ("hammer-curls", "Hammer Curls"),
        ("preacher-curls", "Preacher Curls"),
        ("tricep-pushdowns", "Tricep Pushdowns"),
        ("skull-crushers", "Skull Crushers"),
        ("tricep-extensions", "Tricep Extensions"),
        ("concentration-curls", "Concentration Curls"),
    ],
    "Core": [
        ("crunches", "Crunches"),
        ("leg-raises", "Leg Raises"),
        ("planks", "Planks"),
        ("russian-twists", "Russian Twists"),
        ("ab-wheel", "Ab Wheel"),
        ("hanging-leg-raises", "Hanging Leg Raises"),
        ("wood-chops", "Wood Chops"),
    ],
    "Olympic Lifts": [
        ("clean-and-jerk", "Clean and Jerk"),
        ("power-clean", "Power Clean"),
        ("snatch", "Snatch"),
        ("clean-pull", "Clean Pull"),
        ("snatch-pull", "Snatch Pull"),
    ],
    "Cardio": [
        ("treadmill", "Treadmill"),
        ("stationary-bike", "Stationary Bike"),
        ("rowing-machine", "Rowing Machine"),
        ("elliptical", "Elliptical"),
        ("jump-rope", "Jump Rope"),
        ("burpees", "Burpees"),
    ],
}

CARDIO_GROUPS = {"Cardio"}
