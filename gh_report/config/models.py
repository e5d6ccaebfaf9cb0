"""Configuration models for alerts and named queries."""

from dataclasses import dataclass

from ..query.expressions import Expression


class ConfigError(ValueError):
    """Raised when a configuration file is invalid."""


@dataclass(frozen=True)
class User:
    """A person who can own or be cc'd on alerts."""

    name: str
    email_address: str
    email_alias: str | None
    github_login: str

    def matches(self, identifier: str) -> bool:
        """Check whether ``identifier`` refers to this user.

        Accepts the email alias, the email address, or the GitHub login
        written with its leading ``@``.
        """
        if identifier.startswith("@"):
            return identifier[1:] == self.github_login
        return identifier in (self.email_alias, self.email_address)


@dataclass(frozen=True)
class NamedQuery:
    """A saved query shown as one section of a report."""

    name: str
    expression: Expression
    source_text: str


@dataclass(frozen=True)
class Alert:
    """A query whose result set changes are mailed to its owners."""

    name: str
    query: Expression
    query_text: str
    owners: tuple[User, ...]
    ccs: tuple[User, ...] = ()
