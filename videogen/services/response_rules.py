"""Ordered extractor rules over provider JSON bodies.

Providers disagree on where they put the video URL and the job identifier.
Each rule looks up one dotted path; the first rule yielding a non-empty
string wins, so supporting a new provider format means appending a rule.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FieldRule:
    path: Tuple[str, ...]

    @classmethod
    def of(cls, dotted: str) -> "FieldRule":
        return cls(tuple(dotted.split(".")))

    def extract(self, body: Mapping[str, Any]) -> Optional[str]:
        node: Any = body
        for key in self.path:
            if not isinstance(node, Mapping):
                return None
            node = node.get(key)
        if node is None or isinstance(node, (dict, list, bool)):
            return None
        value = str(node).strip()
        return value or None


VIDEO_URL_RULES = (
    FieldRule.of("video_url"),
    FieldRule.of("url"),
    FieldRule.of("result.video_url"),
)

JOB_ID_RULES = (
    FieldRule.of("job_id"),
    FieldRule.of("id"),
)

FAILURE_DETAIL_RULES = (
    FieldRule.of("error"),
    FieldRule.of("message"),
    FieldRule.of("detail"),
)


def first_match(rules: Iterable[FieldRule], body: Mapping[str, Any]) -> Optional[str]:
    for rule in rules:
        value = rule.extract(body)
        if value is not None:
            return value
    return None


def extract_video_url(body: Mapping[str, Any]) -> Optional[str]:
    return first_match(VIDEO_URL_RULES, body)


def extract_job_id(body: Mapping[str, Any]) -> Optional[str]:
    return first_match(JOB_ID_RULES, body)


def extract_status(body: Mapping[str, Any]) -> str:
    return str(body.get("status") or "").strip().lower()


def extract_failure_detail(body: Mapping[str, Any]) -> Optional[str]:
    return first_match(FAILURE_DETAIL_RULES, body)
