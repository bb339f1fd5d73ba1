"""AI discovery file evaluator (llms.txt, ai.txt and friends)."""

from collections.abc import Sequence

from scanner.checks.models import CHECK_WEIGHTS, CheckResult, Intent, Recommendation
from scanner.crawler.fetcher import DiscoveryFileProbe

CHECK_ID = "aiDiscoveryFiles"
CHECK_NAME = "AI Discovery Files"

# Files found -> score. Discovery files help AI, so they hurt a blocker.
BLOCK_SCORES = {0: 100, 1: 60, 2: 30}
ALLOW_SCORES = {0: 0, 1: 50, 2: 80}


def _example_files(base_url: str) -> str:
    return f"""# Create /llms.txt in your root:
# BotCheck
> A tool to check AI crawler access to websites.

This site provides free AI visibility analysis.

## Docs
- [Homepage]({base_url}): Main scanning tool

# Create /ai.txt in your root:
# See https://site.spawning.ai/spawning-ai-txt
User-Agent: *
Allowed: Yes"""


def _probe_detail(probe: DiscoveryFileProbe) -> str:
    if probe.found:
        return f"✓ {probe.name} found ({probe.byte_length} bytes) — {probe.file.description}"
    if probe.error is not None:
        return f"✗ {probe.name} not accessible"
    if probe.is_empty:
        return f"⚠ {probe.name} exists but appears empty"
    return f"✗ {probe.name} not found (HTTP {probe.status_code})"


def check_ai_discovery_files(
    probes: Sequence[DiscoveryFileProbe],
    base_url: str,
    intent: Intent,
) -> CheckResult:
    """
    Score the presence of AI discovery files.

    Args:
        probes: One probe per well-known path, in probe order
        base_url: Site origin, used in the example llms.txt
        intent: Block or allow

    Returns:
        CheckResult for the discovery files
    """
    details = [_probe_detail(p) for p in probes]
    found_names = [p.name for p in probes if p.found]
    found_count = len(found_names)

    if intent == Intent.BLOCK:
        score = BLOCK_SCORES.get(found_count, 0)
    else:
        score = ALLOW_SCORES.get(found_count, 100)

    recommendation = None
    if intent == Intent.BLOCK and found_count > 0:
        recommendation = Recommendation(
            text=f"Remove {', '.join(found_names)} to reduce AI discoverability.",
            snippet="# Delete these files from your server:\n"
            + "\n".join(f"# - {name}" for name in found_names),
            snippet_lang="bash",
        )
    elif intent == Intent.ALLOW and found_count < 2:
        recommendation = Recommendation(
            text="Add AI discovery files so AI systems can understand your site.",
            snippet=_example_files(base_url),
            snippet_lang="txt",
        )

    if found_count:
        summary = f"{found_count}/{len(probes)} files found: {', '.join(found_names)}"
    else:
        summary = f"No AI discovery files found (checked {len(probes)})"

    return CheckResult(
        id=CHECK_ID,
        name=CHECK_NAME,
        score=score,
        weight=CHECK_WEIGHTS[intent][CHECK_ID],
        summary=summary,
        details=tuple(details),
        recommendation=recommendation,
    )
