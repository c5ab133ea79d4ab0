"""
Constants for Step Metrics.

Defines metric kinds, wire-level URNs and labels, numeric bounds and
log message templates.
"""

# =============================================================================
# METRIC KINDS
# =============================================================================

METRIC_KIND_COUNTER = "counter"
METRIC_KIND_DISTRIBUTION = "distribution"
METRIC_KIND_GAUGE = "gauge"

# =============================================================================
# RESULT VIEWS
# =============================================================================

RESULTS_ATTEMPTED_ONLY = "attempted_only"
RESULTS_ATTEMPTED_AND_COMMITTED = "attempted_and_committed"

COMMITTED_SUPPORTED = "supported"
COMMITTED_UNSUPPORTED = "unsupported"

COMMITTED_METRICS_UNSUPPORTED_MESSAGE = (
    "This execution backend does not currently support committed metrics results."
)

# =============================================================================
# NUMERIC BOUNDS
# =============================================================================

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

# Distribution identity: min starts above every sample, max below
DISTRIBUTION_IDENTITY_MIN = INT64_MAX
DISTRIBUTION_IDENTITY_MAX = INT64_MIN

# Histogram layout: magnitudes below 2**HISTOGRAM_SUB_BUCKET_BITS are exact,
# every higher power of two is split into 2**HISTOGRAM_SUB_BUCKET_BITS buckets
HISTOGRAM_SUB_BUCKET_BITS = 3

MIN_PERCENTILE_TARGET = 0.0
MAX_PERCENTILE_TARGET = 100.0

# =============================================================================
# STEPS
# =============================================================================

DEFAULT_STEP_PATH_SEPARATOR = "/"

# =============================================================================
# DESCRIPTOR URNS AND LABELS
# =============================================================================

URN_USER_SUM_INT64 = "metric:user:sum_int64:v1"
URN_USER_DISTRIBUTION_INT64 = "metric:user:distribution_int64:v1"
URN_USER_LATEST_INT64 = "metric:user:latest_int64:v1"
URN_ELEMENT_COUNT = "metric:element_count:v1"
URN_SAMPLED_BYTE_SIZE = "metric:sampled_byte_size:v1"

LABEL_NAMESPACE = "namespace"
LABEL_NAME = "name"
LABEL_STEP = "step"

# =============================================================================
# SYSTEM METRICS
# =============================================================================

SYSTEM_NAMESPACE = "system"

ELEMENT_COUNT_METRIC = "element_count"
SAMPLED_BYTE_SIZE_METRIC = "sampled_byte_size"

# Unbound metrics with these names are still reported to the control plane
RESERVED_SYSTEM_METRICS = {
    ELEMENT_COUNT_METRIC: URN_ELEMENT_COUNT,
    SAMPLED_BYTE_SIZE_METRIC: URN_SAMPLED_BYTE_SIZE,
}

# =============================================================================
# CONFIGURATION
# =============================================================================

SETTINGS_ENV_PREFIX = "STEPMETRICS_"

OPTION_JOB_ID = "job_id"
OPTION_ATTEMPT_ID = "attempt_id"

REQUIRED_OPTIONS = [OPTION_JOB_ID, OPTION_ATTEMPT_ID]

# =============================================================================
# EXPORT
# =============================================================================

EXPORT_FORMAT_DICT = "dict"
EXPORT_FORMAT_JSON = "json"

# =============================================================================
# LOG MESSAGES
# =============================================================================

LOG_CONTAINER_CREATED = "Metric container created for step {step}"
LOG_CONTAINER_MERGED = "Merged {cells} cells into step {step}"
LOG_REGISTRY_FOLDED = "Folded {containers} containers into registry {registry}"
LOG_REGISTRY_RESET = "Registry {registry} reset ({containers} containers)"
LOG_PERCENTILE_MISMATCH = (
    "Distribution {name} already tracks percentiles {existing}; ignoring {requested}"
)
LOG_REGISTRY_CREATED = "Metrics registry created for job {job_id} attempt {attempt_id}"
