"""Rule-based work/personal classification of calendar events.

Rules are plain keyword lists. The classifier matches them literally;
translations are added to a rule when a keyword is entered (see
``add_keyword``), not looked up at classification time.
"""

import dataclasses
import json
import logging
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from seder.config import AUTO_SELECT_CONFIDENCE, UNMATCHED_CONFIDENCE
from seder.domain.clients import normalize_client_name
from seder.domain.entities import (
    CalendarEvent,
    ClassificationResult,
    ClassificationRule,
    MatchType,
    RuleType,
)
from seder.domain.errors import ValidationError

logger = logging.getLogger(__name__)

EXACT_TITLE_CONFIDENCE = 0.95
CALENDAR_CONFIDENCE = 0.9
MAX_TITLE_CONFIDENCE = 0.95
BASE_TITLE_CONFIDENCE = 0.75
PER_CHARACTER_CONFIDENCE = 0.02

# Hebrew keyword -> English equivalents
TRANSLATIONS: dict[str, tuple[str, ...]] = {
    "הופעה": ("gig", "show", "concert", "performance"),
    "חתונה": ("wedding",),
    "חזרה": ("rehearsal",),
    "שיעור": ("lesson", "class", "teaching"),
    "פגישה": ("meeting",),
    "להקה": ("band",),
    "ישיבה": ("session",),
    "פרויקט": ("project",),
    "רופא": ("doctor",),
    "שיניים": ("dentist", "dental"),
    "יום הולדת": ("birthday", "bday"),
    "חדר כושר": ("gym", "fitness"),
    "ספורט": ("sport", "sports", "workout"),
    "אמא": ("mom", "mother"),
    "אבא": ("dad", "father"),
    "משפחה": ("family",),
    "חופשה": ("vacation", "holiday"),
}

_REVERSE_TRANSLATIONS: dict[str, str] = {
    english: hebrew for hebrew, englishes in TRANSLATIONS.items() for english in englishes
}

DEFAULT_WORK_KEYWORDS = ("הופעה", "חתונה", "חזרה", "שיעור", "להקה", "פגישה", "ישיבה", "פרויקט")
DEFAULT_PERSONAL_KEYWORDS = (
    "רופא", "שיניים", "אמא", "אבא", "ספורט", "חדר כושר", "יום הולדת", "משפחה", "חופשה",
)


def fold(text: str) -> str:
    """Casefold and strip diacritics (Latin accents, Hebrew vowel points)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold().strip()


def related_keywords(keyword: str) -> tuple[str, ...]:
    """Translations of a keyword in the other language."""
    keyword = keyword.strip()
    if keyword in TRANSLATIONS:
        return TRANSLATIONS[keyword]
    hebrew = _REVERSE_TRANSLATIONS.get(keyword.lower())
    return (hebrew,) if hebrew else ()


def _with_translations(keywords: Iterable[str]) -> tuple[str, ...]:
    expanded: list[str] = []
    for keyword in keywords:
        for candidate in (keyword, *related_keywords(keyword)):
            if candidate not in expanded:
                expanded.append(candidate)
    return tuple(expanded)


@dataclass(frozen=True)
class RuleSet:
    """The user's classification rules, passed explicitly to the classifier."""

    rules: tuple[ClassificationRule, ...]

    @classmethod
    def default(cls) -> "RuleSet":
        return cls(
            rules=(
                ClassificationRule(
                    id="work-default-title",
                    type=RuleType.WORK,
                    match_type=MatchType.TITLE,
                    keywords=_with_translations(DEFAULT_WORK_KEYWORDS),
                ),
                ClassificationRule(
                    id="personal-default-title",
                    type=RuleType.PERSONAL,
                    match_type=MatchType.TITLE,
                    keywords=_with_translations(DEFAULT_PERSONAL_KEYWORDS),
                ),
            )
        )


def add_keyword(rule_set: RuleSet, rule_type: RuleType, keyword: str) -> RuleSet:
    """Add a keyword and its translations to the title rule of ``rule_type``.

    Keywords already present (case-insensitively) are not added twice.
    """
    keyword = keyword.strip()
    if not keyword:
        raise ValidationError("Keyword cannot be empty")

    candidates = (keyword, *related_keywords(keyword))
    rules = []
    for rule in rule_set.rules:
        if rule.type == rule_type and rule.match_type == MatchType.TITLE:
            existing = {k.lower() for k in rule.keywords}
            new_ones = tuple(k for k in candidates if k.lower() not in existing)
            if new_ones:
                rule = dataclasses.replace(rule, keywords=rule.keywords + new_ones)
        rules.append(rule)
    return RuleSet(rules=tuple(rules))


def remove_keyword(rule_set: RuleSet, rule_type: RuleType, keyword: str) -> RuleSet:
    """Remove a keyword (case-insensitively) from the rules of ``rule_type``."""
    target = keyword.strip().lower()
    rules = []
    for rule in rule_set.rules:
        if rule.type == rule_type:
            rule = dataclasses.replace(
                rule, keywords=tuple(k for k in rule.keywords if k.lower() != target)
            )
        rules.append(rule)
    return RuleSet(rules=tuple(rules))


def _title_confidence(title: str, keyword: str) -> Optional[float]:
    if not keyword or keyword not in title:
        return None
    if title == keyword:
        return EXACT_TITLE_CONFIDENCE
    return min(MAX_TITLE_CONFIDENCE, BASE_TITLE_CONFIDENCE + PER_CHARACTER_CONFIDENCE * len(keyword))


def suggest_client(title: str, client_names: Sequence[str]) -> Optional[str]:
    """The longest known client name that appears in the title."""
    title_key = normalize_client_name(title)
    best: Optional[str] = None
    best_length = 0
    for name in client_names:
        key = normalize_client_name(name)
        if len(key) >= 2 and key in title_key and len(key) > best_length:
            best, best_length = name, len(key)
    return best


def classify_event(
    event: CalendarEvent, rule_set: RuleSet, client_names: Sequence[str] = ()
) -> ClassificationResult:
    """Classify one event; the most specific matching keyword wins."""
    title = fold(event.title)
    calendar_id = fold(event.calendar_id) if event.calendar_id else ""

    best: Optional[tuple[float, ClassificationRule, str]] = None
    for rule in rule_set.rules:
        if not rule.enabled:
            continue
        for keyword in rule.keywords:
            folded = fold(keyword)
            if rule.match_type == MatchType.TITLE:
                confidence = _title_confidence(title, folded)
            elif calendar_id and folded and folded in calendar_id:
                confidence = CALENDAR_CONFIDENCE
            else:
                confidence = None
            if confidence is not None and (best is None or confidence > best[0]):
                best = (confidence, rule, keyword)

    suggested = suggest_client(event.title, client_names)
    if best is None:
        # Most calendar entries of this user base are paid work
        return ClassificationResult(
            event_id=event.id,
            is_work=True,
            confidence=UNMATCHED_CONFIDENCE,
            suggested_client=suggested,
        )

    confidence, rule, keyword = best
    return ClassificationResult(
        event_id=event.id,
        is_work=rule.type == RuleType.WORK,
        confidence=confidence,
        suggested_client=suggested,
        matched_rule=rule.id,
        matched_keyword=keyword,
    )


def classify_events(
    events: Sequence[CalendarEvent], rule_set: RuleSet, client_names: Sequence[str] = ()
) -> list[ClassificationResult]:
    results = [classify_event(event, rule_set, client_names) for event in events]
    logger.debug(
        "Classified %d events, %d as work", len(results), sum(1 for r in results if r.is_work)
    )
    return results


def select_for_import(
    results: Iterable[ClassificationResult],
    imported_ids: Iterable[str] = (),
    threshold: float = AUTO_SELECT_CONFIDENCE,
) -> list[str]:
    """Event IDs preselected for import: confident work not yet imported."""
    imported = set(imported_ids)
    return [
        result.event_id
        for result in results
        if result.is_work and result.confidence >= threshold and result.event_id not in imported
    ]


def _rule_to_dict(rule: ClassificationRule) -> dict:
    return {
        "id": rule.id,
        "type": rule.type.value,
        "match_type": rule.match_type.value,
        "keywords": list(rule.keywords),
        "enabled": rule.enabled,
    }


def _rule_from_dict(data: dict) -> ClassificationRule:
    return ClassificationRule(
        id=str(data["id"]),
        type=RuleType(data["type"]),
        match_type=MatchType(data.get("match_type", MatchType.TITLE.value)),
        keywords=tuple(str(k) for k in data.get("keywords", [])),
        enabled=bool(data.get("enabled", True)),
    )


def load_rules(path: Path) -> RuleSet:
    """Load a rule set from JSON, falling back to the defaults.

    The file holds ``{"rules": [...]}``. Anything else, including a bare
    list of rules, is treated as unreadable.
    """
    if not path.exists():
        return RuleSet.default()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        return RuleSet(rules=tuple(_rule_from_dict(item) for item in data.get("rules", [])))
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("Could not load classification rules from %s: %s", path, e)
        return RuleSet.default()


def save_rules(path: Path, rule_set: RuleSet) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump({"rules": [_rule_to_dict(rule) for rule in rule_set.rules]}, f, ensure_ascii=False, indent=2)


def reset_rules(path: Path) -> RuleSet:
    """Forget saved rules and return the defaults."""
    if path.exists():
        path.unlink()
    return RuleSet.default()
