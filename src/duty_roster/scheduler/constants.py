"""Constants for duty schedule generation."""

# Every slot holds exactly two people
POSITIONS_PER_SLOT = 2

# Secondary people get exactly (days - 1) duties, never fewer than this
MIN_SECONDARY_DUTY_TARGET = 1

# Repair engine limits
MAX_SWAPS_PER_PHASE = 100
MAX_HIERARCHY_PASSES = 10
DEFAULT_BALANCE_ROUNDS = 3

# Best-of-N trial runs
DEFAULT_TRIALS = 1
MAX_TRIALS = 50

# Repair phase names, in execution order
PHASE_SECONDARY_TARGET = "secondary_target"
PHASE_SENIORITY = "seniority"
PHASE_SMOOTHING = "smoothing"
REPAIR_PHASES = [PHASE_SECONDARY_TARGET, PHASE_SENIORITY, PHASE_SMOOTHING]
