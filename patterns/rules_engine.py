"""Pure-function field validation and sanitization.

Rules are stateless predicates over one form value. A validation
configuration is a list of (field, rule, message) entries evaluated in
order; sanitization separately trims and escapes text fields and parses
date fields. No database, no side effects: failures are reported in the
result, never raised, and the caller decides what to do with them.

Example::

    outcome = check_fields(
        {"name": "  Fiction "},
        rules=[FieldRule("name", REQUIRED, "Genre name required")],
        kinds={"name": FieldKind.TEXT},
    )
    outcome.passed            # True
    outcome.cleaned["name"]   # "Fiction"
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Iterable, Mapping


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation against one field."""

    passed: bool
    rule_name: str
    field: str
    message: str


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0


@dataclass
class FieldCheck:
    """Validation failures plus the sanitized field mapping."""

    outcome: RuleSetResult
    cleaned: dict[str, Any]

    @property
    def passed(self) -> bool:
        return self.outcome.all_passed

    @property
    def errors(self) -> list[RuleResult]:
        return self.outcome.failed

    def failed_fields(self) -> set[str]:
        return {r.field for r in self.outcome.failed}


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    """A named predicate over a raw form value."""

    name: str
    check: Callable[[Any], bool]


@dataclass(frozen=True)
class FieldRule:
    """One entry of a validation configuration."""

    field: str
    rule: Rule
    message: str


class FieldKind(str, Enum):
    """How a field is sanitized."""

    TEXT = "text"
    DATE = "date"
    LIST = "list"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


_REDUCED_DATE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def parse_date(value: Any) -> date | None:
    """Parse an ISO-8601 date or datetime string; None if it is not one.

    Reduced precision is accepted: "1920" is January 1st and "1920-03" is
    March 1st.
    """
    text = _text(value)
    if not text:
        return None
    reduced = _REDUCED_DATE.match(text)
    if reduced:
        try:
            return date(int(reduced.group(1)), int(reduced.group(2) or 1), 1)
        except ValueError:
            return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


_ALPHANUMERIC = re.compile(r"^[0-9A-Za-z]+$")

REQUIRED = Rule("required", lambda v: len(_text(v)) > 0)
# Marker: when the value is falsy the remaining rules for the field are skipped
OPTIONAL = Rule("optional", lambda v: True)
ISO_DATE = Rule("iso_date", lambda v: parse_date(v) is not None)
ALPHANUMERIC = Rule("alphanumeric", lambda v: bool(_ALPHANUMERIC.match(_text(v))))


def max_length(limit: int) -> Rule:
    return Rule(f"max_length_{limit}", lambda v: len(_text(v)) <= limit)


def one_of(values: Iterable[str]) -> Rule:
    allowed = frozenset(values)
    return Rule("one_of", lambda v: _text(v) in allowed)


# ---------------------------------------------------------------------------
# Sanitizers
# ---------------------------------------------------------------------------

_ESCAPES = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}


def escape(text: str) -> str:
    """Replace markup-significant characters with HTML entities."""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def sanitize(fields: Mapping[str, Any], kinds: Mapping[str, FieldKind]) -> dict[str, Any]:
    """Trim/escape text, sanitize lists element-wise, parse dates."""
    cleaned: dict[str, Any] = {}
    for name, kind in kinds.items():
        raw = fields.get(name)
        if kind is FieldKind.DATE:
            cleaned[name] = parse_date(raw)
        elif kind is FieldKind.LIST:
            if raw is None:
                items = []
            elif isinstance(raw, (list, tuple)):
                items = raw
            else:
                items = [raw]
            cleaned[name] = tuple(escape(_text(v)) for v in items if _text(v))
        else:
            cleaned[name] = escape(_text(raw))
    return cleaned


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def evaluate_rules(fields: Mapping[str, Any], rules: Iterable[FieldRule]) -> RuleSetResult:
    """Evaluate a validation configuration in order.

    A field stops being evaluated at its first failure, or at an OPTIONAL
    entry when its value is falsy.
    """
    results: list[RuleResult] = []
    stopped: set[str] = set()
    for entry in rules:
        if entry.field in stopped:
            continue
        value = fields.get(entry.field)
        if entry.rule is OPTIONAL:
            if not _text(value):
                stopped.add(entry.field)
            continue
        passed = entry.rule.check(value)
        results.append(RuleResult(
            passed=passed,
            rule_name=entry.rule.name,
            field=entry.field,
            message=entry.message,
        ))
        if not passed:
            stopped.add(entry.field)
    return RuleSetResult(all_passed=True, results=results)


def check_fields(
    fields: Mapping[str, Any],
    rules: Iterable[FieldRule],
    kinds: Mapping[str, FieldKind],
) -> FieldCheck:
    """Validate and sanitize one form submission."""
    return FieldCheck(
        outcome=evaluate_rules(fields, rules),
        cleaned=sanitize(fields, kinds),
    )
