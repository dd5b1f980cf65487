"""Tier-specific prompt adaptation.

- LOW: condenses to a ``TASK:`` line plus a fast-path instruction list.
  Only courtesy framing ("please", "could you", "thanks") is stripped; the
  request itself is kept verbatim.
- MEDIUM: appends acceptance criteria and a scope reminder.
- HIGH: appends plan, risk/impact assessment and verification checklist
  sections that must be completed before execution.

The transform is deterministic and never drops the user's request.
"""

import re

from tierroute.routing.tiers import Tier

_LEADING_FRAMING = (
    re.compile(r"^(?:hey|hi|hello)(?:\s+there)?[,!.]?\s+", re.IGNORECASE),
    re.compile(r"^(?:please|kindly)[,]?\s+", re.IGNORECASE),
    re.compile(r"^(?:could|can|would|will)\s+you\s+(?:please\s+)?", re.IGNORECASE),
    re.compile(
        r"^i(?:'d|\s+would)\s+like\s+(?:you\s+)?to\s+|^i\s+(?:want|need)\s+you\s+to\s+",
        re.IGNORECASE,
    ),
)
# Trailing courtesy must be set off by punctuation; "say thank you" is content
_TRAILING_FRAMING = re.compile(
    r"(?:^|\s*[,.!;?]\s*)"
    r"(?:please|thanks|thank\s+you|many\s+thanks)(?:\s+(?:so|very)\s+much|\s+in\s+advance)?"
    r"[\s.!?]*$",
    re.IGNORECASE,
)

LOW_INSTRUCTIONS = (
    "Work fast and direct:",
    "- Do exactly what the task asks; nothing more.",
    "- Keep exploration minimal: open only the files the task names or needs.",
    "- Take the first correct solution; skip alternatives.",
    "- Report the result in a few lines.",
)

MEDIUM_SCAFFOLD = (
    "## Acceptance Criteria",
    "- The requested change works for the described case.",
    "- Existing behavior outside the change is preserved.",
    "- Relevant tests pass or are added.",
    "",
    "## Scope",
    "- Stay within the files and components the task concerns.",
    "- Flag, rather than fix, problems found outside that scope.",
)

HIGH_SCAFFOLD = (
    "## Plan",
    "Before changing anything, write a step-by-step plan covering the affected",
    "components, the order of changes and their dependencies.",
    "",
    "## Risk & Impact Assessment",
    "- What can break, and who or what depends on it?",
    "- Data, security and compatibility implications.",
    "- Rollback strategy if the change misbehaves.",
    "",
    "## Verification Checklist",
    "- [ ] Plan reviewed against the original request",
    "- [ ] Risks above addressed or explicitly accepted",
    "- [ ] Tests cover the changed behavior and its edge cases",
    "- [ ] No regressions in dependent components",
    "- [ ] Rollback path confirmed",
)


def strip_framing(prompt: str) -> str:
    """Remove courtesy framing around a request.

    Falls back to the stripped original when nothing would remain.
    """
    text = prompt.strip()
    changed = True
    while changed:
        changed = False
        for pattern in _LEADING_FRAMING:
            stripped = pattern.sub("", text, count=1)
            if stripped != text:
                text = stripped
                changed = True
    text = _TRAILING_FRAMING.sub("", text).strip()
    return text or prompt.strip()


def adapt_prompt(prompt: str, tier: Tier | str) -> str:
    """Rewrite a task prompt to suit the chosen tier.

    Args:
        prompt: Original task text.
        tier: Target tier, as a Tier or a case-insensitive name.

    Returns:
        The adapted prompt.

    Raises:
        ValidationError: If ``tier`` is a string naming no tier.
    """
    target = Tier.parse(tier)
    original = prompt.strip()

    if target is Tier.LOW:
        return "\n".join((f"TASK: {strip_framing(prompt)}", "", *LOW_INSTRUCTIONS))
    if target is Tier.MEDIUM:
        return "\n".join((original, "", *MEDIUM_SCAFFOLD))
    return "\n".join((original, "", *HIGH_SCAFFOLD))
