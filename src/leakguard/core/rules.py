"""Detection and suppression rules.

Each matcher describes its heuristic with plain parameters (field names,
literal sets, hash shape, marker tokens) and renders a Python regular
expression from them. Rules compile that expression once, when the rule
set is built, and are immutable afterwards.
"""

import re
from dataclasses import dataclass, field
from typing import Match, Optional, Pattern, Tuple

from .models import Severity


SECRET_FIELD_NAMES = ("password",)

# Insecure default credentials that shipped in earlier releases.
KNOWN_BAD_LITERALS = ("admin@123", "queuepal123", "password123", "test123")

PENDING_ROTATION_MARKER = "TEMP_HASH_NEEDS_RESET"
CONFIG_READ_TOKEN = "process.env"
MASK_RUN = "•" * 8
QUOTES = "'\""


def _alternation(words: Tuple[str, ...]) -> str:
    return "(?:" + "|".join(re.escape(word) for word in words) + ")"


def _not_followed_by(tokens: Tuple[str, ...]) -> str:
    return "".join(f"(?!.*{re.escape(token)})" for token in tokens)


# === Detection matchers ===

@dataclass(frozen=True)
class AssignmentMatcher:
    """A secret-named field bound to a quoted literal of ``min_length``+ characters.

    The match is vetoed when any ``unless_followed_by`` token, or an empty
    re-assignment of the same field, appears later on the line.
    """

    field_names: Tuple[str, ...] = SECRET_FIELD_NAMES
    min_length: int = 3
    separators: str = "=:"
    quotes: str = QUOTES
    unless_followed_by: Tuple[str, ...] = (CONFIG_READ_TOKEN,)

    def pattern(self) -> str:
        fields = _alternation(self.field_names)
        sep = f"[{re.escape(self.separators)}]"
        quote = f"[{re.escape(self.quotes)}]"
        value = f"[^{re.escape(self.quotes)}]{{{self.min_length},}}"
        empty_reassignment = f"(?!.*{fields}\\s*{sep}\\s*{quote}{quote})"
        return (
            f"{fields}\\s*{sep}\\s*{quote}{value}{quote}"
            f"{_not_followed_by(self.unless_followed_by)}{empty_reassignment}"
        )


@dataclass(frozen=True)
class LiteralSetMatcher:
    """Verbatim occurrence of any literal from a fixed set, anywhere on the line."""

    literals: Tuple[str, ...] = KNOWN_BAD_LITERALS

    def pattern(self) -> str:
        return _alternation(self.literals)


@dataclass(frozen=True)
class HashShapeMatcher:
    """Encoded output of an adaptive password hash (bcrypt by default).

    Shape: ``<prefix><variant>$<cost>$<body>`` where the body is exactly
    ``body_length`` characters drawn from ``body_ranges`` plus ``body_extra``.
    """

    prefix: str = "$2"
    variants: str = "aby"
    separator: str = "$"
    body_ranges: Tuple[Tuple[str, str], ...] = (("A", "Z"), ("a", "z"), ("0", "9"))
    body_extra: str = "./"
    body_length: int = 53
    unless_followed_by: Tuple[str, ...] = ("TEMP",)

    def pattern(self) -> str:
        sep = re.escape(self.separator)
        ranges = "".join(f"{low}-{high}" for low, high in self.body_ranges)
        body = f"[{ranges}{re.escape(self.body_extra)}]{{{self.body_length}}}"
        return (
            f"{re.escape(self.prefix)}[{re.escape(self.variants)}]{sep}[0-9]+{sep}{body}"
            f"{_not_followed_by(self.unless_followed_by)}"
        )


# === Suppression matchers ===

@dataclass(frozen=True)
class EmptyLiteralMatcher:
    """Secret field assigned or declared with an explicit empty quoted literal."""

    field_names: Tuple[str, ...] = SECRET_FIELD_NAMES
    declaration_keywords: Tuple[str, ...] = ("let", "const")
    quotes: str = QUOTES

    def pattern(self) -> str:
        fields = _alternation(self.field_names)
        keywords = _alternation(self.declaration_keywords)
        quote = f"[{re.escape(self.quotes)}]"
        return f"(?:{keywords}\\s+)?{fields}(?::|\\s*=)\\s*{quote}{quote}"


@dataclass(frozen=True)
class MarkerMatcher:
    """Any of the marker tokens, anywhere on the line."""

    markers: Tuple[str, ...] = (PENDING_ROTATION_MARKER,)

    def pattern(self) -> str:
        return _alternation(self.markers)


@dataclass(frozen=True)
class FieldContextMatcher:
    """A secret field name followed later on the same line by a context token.

    With ``context_close`` set, the token is an opener/closer pair such as
    ``${`` ... ``}``.
    """

    context_open: str
    context_close: Optional[str] = None
    field_names: Tuple[str, ...] = SECRET_FIELD_NAMES

    def pattern(self) -> str:
        source = f"{_alternation(self.field_names)}.*{re.escape(self.context_open)}"
        if self.context_close:
            source += f".*{re.escape(self.context_close)}"
        return source


# === Rules ===

@dataclass(frozen=True)
class Rule:
    """A detection heuristic paired with its severity."""

    rule_id: str
    title: str
    matcher: object
    severity: Severity
    case_insensitive: bool = False
    description: str = ""
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        flags = re.IGNORECASE if self.case_insensitive else 0
        object.__setattr__(self, "regex", re.compile(self.matcher.pattern(), flags))

    def search(self, line: str) -> Optional[Match]:
        """First match of the rule on ``line``, or None."""
        return self.regex.search(line)

    def first_match(self, line: str) -> Optional[str]:
        """Return the first matching substring of ``line``, or None."""
        match = self.search(line)
        return match.group(0) if match else None


@dataclass(frozen=True)
class SuppressionRule:
    """An allow-list heuristic. A match vetoes every rule for the line."""

    name: str
    matcher: object
    description: str = ""
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", re.compile(self.matcher.pattern()))

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None


@dataclass(frozen=True)
class RuleSet:
    """Ordered, immutable detection and suppression rules."""

    rules: Tuple[Rule, ...]
    suppressions: Tuple[SuppressionRule, ...]

    def suppression_for(self, line: str) -> Optional[SuppressionRule]:
        """First suppression rule matching ``line``, in evaluation order."""
        for suppression in self.suppressions:
            if suppression.matches(line):
                return suppression
        return None

    def rule(self, rule_id: str) -> Rule:
        for rule in self.rules:
            if rule.rule_id == rule_id:
                return rule
        raise KeyError(rule_id)


def default_rule_set() -> RuleSet:
    """Build the fixed rule set. Order and severities must not change."""
    rules = (
        Rule(
            rule_id="literal-secret-assignment",
            title="Hardcoded password assignment",
            matcher=AssignmentMatcher(),
            severity=Severity.HIGH,
            case_insensitive=True,
            description="A password field is bound to a quoted literal.",
        ),
        Rule(
            rule_id="known-bad-literal",
            title="Known insecure default credential",
            matcher=LiteralSetMatcher(),
            severity=Severity.CRITICAL,
            case_insensitive=True,
            description="A previously used default credential appears verbatim.",
        ),
        Rule(
            rule_id="embedded-hash-literal",
            title="Embedded bcrypt hash",
            matcher=HashShapeMatcher(),
            severity=Severity.MEDIUM,
            case_insensitive=False,
            description="A bcrypt-encoded password hash is embedded in source.",
        ),
    )

    suppressions = (
        SuppressionRule(
            name="empty-secret-literal",
            matcher=EmptyLiteralMatcher(),
            description="Password field assigned or declared as an empty string.",
        ),
        SuppressionRule(
            name="masked-display",
            matcher=FieldContextMatcher(context_open=MASK_RUN),
            description="Password shown as a run of UI mask characters.",
        ),
        SuppressionRule(
            name="pending-rotation-marker",
            matcher=MarkerMatcher(),
            description=f"Line carries the {PENDING_ROTATION_MARKER} migration marker.",
        ),
        SuppressionRule(
            name="config-read",
            matcher=FieldContextMatcher(context_open=CONFIG_READ_TOKEN),
            description="Password read from runtime configuration on the same line.",
        ),
        SuppressionRule(
            name="string-interpolation",
            matcher=FieldContextMatcher(context_open="${", context_close="}"),
            description="Password built with string interpolation on the same line.",
        ),
    )

    return RuleSet(rules=rules, suppressions=suppressions)
