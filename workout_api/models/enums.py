from enum import Enum

class ExerciseType(str, Enum):
    BODYWEIGHT = "bodyweight"
    FREE_WEIGHT = "free weight"
    CABLE = "cable"
    MACHINE = "machine"
    KETTLEBELL = "kettlebell"
    RESISTANCE_BAND = "resistance band"
    OTHER = "other"
