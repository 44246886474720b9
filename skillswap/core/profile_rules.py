"""Profile Rules — skill list normalisation and profile completeness.

Invariants:
    - normalize_skills drops blanks, trims, de-duplicates case-insensitively,
      keeps the first spelling and the original order
    - is_profile_complete requires a name, >= 1 offered skill, >= 1 wanted skill
      and an availability value
"""

from skillswap.core.domain_types import Availability

MAX_SKILL_LENGTH = 60


def normalize_skills(skills: list[str] | None) -> list[str]:
    """Trim, drop empty entries and case-insensitive duplicates."""
    seen: set[str] = set()
    result: list[str] = []
    for raw in skills or []:
        skill = " ".join(raw.split())[:MAX_SKILL_LENGTH]
        key = skill.casefold()
        if not skill or key in seen:
            continue
        seen.add(key)
        result.append(skill)
    return result


def is_profile_complete(
    name: str | None,
    skills_offered: list[str],
    skills_wanted: list[str],
    availability: str | None,
) -> bool:
    if not name or not name.strip():
        return False
    if not skills_offered or not skills_wanted:
        return False
    return availability in {a.value for a in Availability}


def has_skill(skills: list[str], skill: str) -> bool:
    """Case-insensitive membership test."""
    key = skill.strip().casefold()
    return any(s.casefold() == key for s in skills)
