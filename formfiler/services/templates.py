"""Placeholder substitution for names, subjects and prefixes"""
import re
from typing import Dict, List, Mapping, Optional

PLACEHOLDER_PATTERN = re.compile(r"\{([^}]+)\}")
MISSING_VALUE = "N/A"


def find_placeholders(template: str) -> List[str]:
    """Return the inner text of every {Placeholder} in the template, in order"""
    return PLACEHOLDER_PATTERN.findall(template)


def resolve_template(
    template: str,
    base: Mapping[str, str],
    overrides: Optional[Mapping[str, str]] = None
) -> str:
    """
    Replace {Placeholder} tokens with answers

    The placeholder text must match a key exactly (case and whitespace
    included). Substituted values are not scanned again.

    Args:
        template: Template string, e.g. "Order for {Vendor}"
        base: Question title -> answer lookup
        overrides: Extra values such as {QuestionTitle}; these win over base

    Returns:
        The resolved string, with "N/A" for every unknown placeholder
    """
    values: Dict[str, str] = dict(base)
    if overrides:
        values.update(overrides)

    def substitute(match: re.Match) -> str:
        value = values.get(match.group(1))
        return MISSING_VALUE if value is None else value

    return PLACEHOLDER_PATTERN.sub(substitute, template)
