"""
Application constants
"""

# Persisted status values
STATUS_PENDING = "pendente"
STATUS_IN_PROGRESS = "em-progresso"
STATUS_DONE = "concluida"

# Persisted priority values
PRIORITY_HIGH = "alta"
PRIORITY_MEDIUM = "media"
PRIORITY_LOW = "baixa"

# Priority tier -> numeric weight used by the scorer
PRIORITY_WEIGHTS = {
    PRIORITY_HIGH: 10,
    PRIORITY_MEDIUM: 5,
    PRIORITY_LOW: 2,
}
PRIORITY_WEIGHT_UNKNOWN = 5

# Accepted spellings for the priority command
PRIORITY_ALIASES = {
    "alta": PRIORITY_HIGH,
    "high": PRIORITY_HIGH,
    "media": PRIORITY_MEDIUM,
    "média": PRIORITY_MEDIUM,
    "medium": PRIORITY_MEDIUM,
    "baixa": PRIORITY_LOW,
    "low": PRIORITY_LOW,
}

# Score = 2*urgency + 3*priority + 4*dependents + 1*depth
SCORE_WEIGHT_URGENCY = 2
SCORE_WEIGHT_PRIORITY = 3
SCORE_WEIGHT_DEPENDENTS = 4
SCORE_WEIGHT_DEPTH = 1

URGENCY_MAX_DAYS = 10  # days since creation are capped here

# Display
NEXT_RUNNER_UPS = 3  # other candidates shown by "next"
PROGRESS_BAR_WIDTH = 20
SCORES_TITLE_MAX = 25
SCORE_HOT_THRESHOLD = 30
SCORE_WARM_THRESHOLD = 20

# Storage
DEFAULT_TASKS_FILE = "tasks/tasks.json"
DATE_FORMAT = "%Y-%m-%d"

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
