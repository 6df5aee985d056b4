"""Application-wide constants and configuration values."""

# Sentinel job id for interviews that are not linked to a job opening
GENERAL_POOL_JOB_ID = "general"

# Day arithmetic
SECONDS_PER_DAY = 86400

# Histogram bucket for losses recorded without a reason
NOT_INFORMED = "Not informed"

# Entity types stored in the entities table
ENTITY_TYPE_JOB = "JOB"
ENTITY_TYPE_CANDIDATE = "CANDIDATE"
ENTITY_TYPE_EMPLOYEE = "EMPLOYEE"
ENTITY_TYPE_TALENT = "TALENT"
ENTITY_TYPE_ABSENCE = "ABSENCE"

ENTITIES_TABLE = "entities"
USERS_TABLE = "users"

# Export formatting
EXPORT_DATE_FORMAT = "%d/%m/%Y"
CONFIDENTIAL_MASK = "CONFIDENTIAL"

# Probation windows (days since admission)
PROBATION_FIRST_PERIOD_DAYS = {"45+45": 45, "30+60": 30}
PROBATION_TOTAL_DAYS = 90
PROBATION_WARNING_DAYS = 7

# Labels used when a talent's application history points at a job
GENERAL_POOL_JOB_TITLE = "General pool"
UNKNOWN_JOB_TITLE = "Unknown job"
