"""Robots.txt parser.

Follows the group semantics used by major crawlers: a crawler obeys the
group(s) naming its product token, falling back to ``*``. Within those
rules the longest matching path wins and ``Allow`` wins ties.
"""

import re
from dataclasses import dataclass, field
from urllib.parse import urlparse


@dataclass
class RobotsRule:
    """A single robots.txt rule."""

    path: str
    allowed: bool

    def __post_init__(self) -> None:
        # Escape everything except * wildcards and a trailing $ anchor
        anchored = self.path.endswith("$")
        body = self.path[:-1] if anchored else self.path
        pattern = ".*".join(re.escape(part) for part in body.split("*"))
        self._regex = re.compile(pattern + ("$" if anchored else ""))

    def matches(self, url_path: str) -> bool:
        """Check if this rule matches a URL path."""
        return self._regex.match(url_path) is not None


@dataclass
class RobotsGroup:
    """Rules shared by one or more consecutive User-agent lines."""

    agents: list[str] = field(default_factory=list)
    rules: list[RobotsRule] = field(default_factory=list)


def user_agent_token(user_agent: str) -> str:
    """Reduce a user agent to its lower-cased product token ("GPTBot/1.0" -> "gptbot")."""
    return user_agent.strip().lower().split("/")[0].strip()


@dataclass
class RobotsParser:
    """Parser for robots.txt files."""

    groups: list[RobotsGroup] = field(default_factory=list)

    @classmethod
    def parse(cls, content: str) -> "RobotsParser":
        """
        Parse robots.txt content into user-agent groups.

        Args:
            content: The robots.txt file content

        Returns:
            RobotsParser instance with every group
        """
        parser = cls()
        current: RobotsGroup | None = None
        in_agent_lines = False

        for line in content.splitlines():
            # Strip inline comments
            line = line.split("#", 1)[0].strip()
            if not line or ":" not in line:
                continue

            directive, _, value = line.partition(":")
            directive = directive.strip().lower()
            value = value.strip()

            if directive == "user-agent":
                if current is None or not in_agent_lines:
                    current = RobotsGroup()
                    parser.groups.append(current)
                current.agents.append(user_agent_token(value))
                in_agent_lines = True
                continue

            in_agent_lines = False

            if directive in ("allow", "disallow") and current is not None:
                # Empty value means no restriction
                if value:
                    current.rules.append(RobotsRule(path=value, allowed=directive == "allow"))

        return parser

    def rules_for(self, user_agent: str) -> list[RobotsRule]:
        """Get the rules that apply to a user agent."""
        token = user_agent_token(user_agent)

        specific = [rule for g in self.groups if token in g.agents for rule in g.rules]
        if any(token in g.agents for g in self.groups):
            return specific

        return [rule for g in self.groups if "*" in g.agents for rule in g.rules]

    def is_allowed(self, url: str, user_agent: str = "*") -> bool:
        """
        Check if a URL may be crawled by a user agent.

        Args:
            url: Absolute URL or path to check
            user_agent: Crawler user agent or product token

        Returns:
            True if crawling is allowed, False otherwise
        """
        parsed = urlparse(url)
        path = parsed.path or "/"
        if parsed.query:
            path = f"{path}?{parsed.query}"

        best: RobotsRule | None = None
        for rule in self.rules_for(user_agent):
            if not rule.matches(path):
                continue
            if (
                best is None
                or len(rule.path) > len(best.path)
                or (len(rule.path) == len(best.path) and rule.allowed and not best.allowed)
            ):
                best = rule

        # Default: allow if no rule matches
        return best.allowed if best is not None else True
