"""
Normalization of parsed issue-form values, and the priority and labels
derived from them.
"""
import re
import logging


__all__ = [
    "FIELD_IDS",
    "is_missing",
    "normalize_value",
    "value_or_missing",
    "normalize_fields",
    "get_severity",
    "get_priority",
    "get_effective_sdk_version",
    "sanitize_label",
    "make_labels",
]


logger = logging.getLogger(__name__)


FIELD_IDS = (
    "severity",
    "sdk-version",
    "sdk-version-other",
    "android-version",
    "device",
    "gradle-version",
    "kotlin-version",
    "steps-to-reproduce",
    "expected-behavior",
    "actual-behavior",
    "logs",
    "additional-context",
    "confirmations",
)

LOGS_FIELD_ID = "logs"

MAX_LABELS = 50

_STATIC_LABELS = ("cmp", "android", "source-github")

_P1_SEVERITY_PREFIX = "Major functionality not working"

_HIGH_PRIORITY = "High"
_DEFAULT_PRIORITY = "Medium"

_SDK_VERSION_OTHER = "Other (specify below)"

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_LABEL_CHARS_RE = re.compile(r"[^a-z0-9\-_]")
_REPEATED_HYPHENS_RE = re.compile(r"-+")


def missing_field_message(field_id):
    return f"Field {field_id} wasn't entered."


def is_checkbox_group(value):
    return (
        isinstance(value, dict)
        and isinstance(value.get("selected"), list)
        and isinstance(value.get("unselected"), list)
    )


def is_missing(value):
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    if isinstance(value, str):
        return len(value.strip()) == 0
    if is_checkbox_group(value):
        return len(value["selected"]) == 0 and len(value["unselected"]) == 0
    return False


def normalize_value(value):
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if isinstance(value, dict) and isinstance(value.get("selected"), list):
        return {"selected": value["selected"], "unselected": value.get("unselected")}
    return str(value)


def value_or_missing(form, field_id):
    value = form.get(field_id)
    if is_missing(value):
        return missing_field_message(field_id)
    return normalize_value(value)


def normalize_fields(form):
    """
    Map every known field id to its display value, substituting the
    "wasn't entered" message for missing values.  Ids outside FIELD_IDS
    are dropped.
    """
    return {field_id: value_or_missing(form, field_id) for field_id in FIELD_IDS}


def _first_selection(form, field_id):
    value = form.get(field_id)
    if isinstance(value, list) and len(value) > 0:
        return value[0]
    else:
        return None


def get_severity(form):
    return _first_selection(form, "severity")


def get_priority(form):
    severity = get_severity(form)
    if isinstance(severity, str) and severity.startswith(_P1_SEVERITY_PREFIX):
        return _HIGH_PRIORITY
    else:
        return _DEFAULT_PRIORITY


def get_effective_sdk_version(form):
    sdk_version = _first_selection(form, "sdk-version")

    if sdk_version == _SDK_VERSION_OTHER:
        sdk_version_other = form.get("sdk-version-other")
        if is_missing(sdk_version_other):
            return "Other"
        return normalize_value(sdk_version_other)

    if sdk_version is None:
        return "unknown"

    return str(sdk_version)


def sanitize_label(value):
    label = str(value).lower()
    label = _WHITESPACE_RE.sub("-", label)
    label = _INVALID_LABEL_CHARS_RE.sub("-", label)
    label = _REPEATED_HYPHENS_RE.sub("-", label)
    return label.strip("-")


def make_labels(issue, form):
    labels = list(_STATIC_LABELS)
    labels.append(f"gh-issue-{issue.number}")
    labels.append(f"sdk-{sanitize_label(get_effective_sdk_version(form))}")

    for github_label in issue.labels:
        label = sanitize_label(github_label)
        if label:
            labels.append(label)
        else:
            logger.warning("Skipping GitHub label %r, nothing left after sanitizing", github_label)

    # dict preserves first-occurrence order
    labels = list(dict.fromkeys(labels))

    if len(labels) > MAX_LABELS:
        logger.warning("%s has %s labels, keeping the first %s", issue, len(labels), MAX_LABELS)

    return labels[:MAX_LABELS]
