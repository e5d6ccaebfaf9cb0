"""XML configuration loading for named queries and alerts."""

import logging
from pathlib import Path
from xml.etree import ElementTree

from ..query.parser import QueryParseError, parse_query
from .models import Alert, ConfigError, NamedQuery, User

logger = logging.getLogger(__name__)


def _load_root(path: str | Path) -> ElementTree.Element:
    try:
        return ElementTree.parse(path).getroot()
    except ElementTree.ParseError as e:
        raise ConfigError(f"Malformed XML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _attribute(element: ElementTree.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ConfigError(f"<{element.tag}> is missing required attribute '{name}'")
    return value


def load_named_queries(path: str | Path) -> list[NamedQuery]:
    """Load named queries from an XML file.

    Every ``<query>`` element below the root is read; its text is the query
    and its optional ``name`` attribute labels the report section.

    Args:
        path: Path to the XML file

    Returns:
        Named queries in document order

    Raises:
        ConfigError: If the file is malformed or a query fails to parse
    """
    queries = []
    for element in _load_root(path).iter("query"):
        text = (element.text or "").strip()
        name = element.get("name") or text
        try:
            expression = parse_query(text)
        except QueryParseError as e:
            raise ConfigError(f"Invalid query '{name}': {e}") from e
        queries.append(NamedQuery(name=name, expression=expression, source_text=text))

    logger.debug("Loaded %d named queries from %s", len(queries), path)
    return queries


class AlertsConfigLoader:
    """Loads users and alerts from an alerts XML file.

    Users are declared once under ``<users>`` and referenced from alerts by
    alias, ``@login`` or email address::

        <config>
          <users default-email-server="example.com">
            <user name="Jane Doe" alias="jdoe" github="@jdoe"/>
          </users>
          <alerts>
            <alert name="Untriaged">
              <query>is:open NOT label:triaged</query>
              <owner>@jdoe</owner>
            </alert>
          </alerts>
        </config>
    """

    def __init__(self) -> None:
        self.users: list[User] = []

    def load(self, path: str | Path) -> list[Alert]:
        """Parse the file and return its alerts in document order.

        Raises:
            ConfigError: On malformed XML, invalid users, unknown owner/cc
                references or an alert query that fails to parse
        """
        root = _load_root(path)
        for users_element in root.iter("users"):
            self._load_users(users_element)

        alerts = [
            self._load_alert(alert_element)
            for alerts_element in root.iter("alerts")
            for alert_element in alerts_element.iter("alert")
        ]
        logger.debug(
            "Loaded %d users and %d alerts from %s", len(self.users), len(alerts), path
        )
        return alerts

    def _load_users(self, users_element: ElementTree.Element) -> None:
        server = users_element.get("default-email-server")
        if server is not None and not server.startswith("@"):
            server = "@" + server

        for user_element in users_element.iter("user"):
            name = _attribute(user_element, "name")
            alias = _attribute(user_element, "alias")
            github = _attribute(user_element, "github")

            if not github.startswith("@"):
                raise ConfigError(f"GitHub login expected to start with @: {github}")
            if alias.startswith("@"):
                raise ConfigError(f"Alias cannot start with @: {alias}")
            if self.find_user(github) is not None:
                raise ConfigError(f"Duplicate user defined with GitHub login: {github}")
            if self.find_user(alias) is not None:
                raise ConfigError(f"Duplicate user defined with alias: {alias}")

            if "@" in alias:
                email, email_alias = alias, None
            elif server is None:
                raise ConfigError(
                    f"User {name} has no email server: set default-email-server "
                    "or use a full email address as alias"
                )
            else:
                email, email_alias = alias + server, alias

            self.users.append(
                User(
                    name=name,
                    email_address=email,
                    email_alias=email_alias,
                    github_login=github[1:],
                )
            )

    def _load_alert(self, alert_element: ElementTree.Element) -> Alert:
        name = _attribute(alert_element, "name")
        query_element = next(alert_element.iter("query"), None)
        if query_element is None:
            raise ConfigError(f"Alert {name} has no <query>")

        query_text = (query_element.text or "").strip()
        try:
            query = parse_query(query_text)
        except QueryParseError as e:
            raise ConfigError(f"Invalid query in alert: {name}") from e

        owners = tuple(
            self.find_user_or_raise((e.text or "").strip())
            for e in alert_element.iter("owner")
        )
        if not owners:
            raise ConfigError(f"Alert {name} has no <owner>")
        ccs = tuple(
            self.find_user_or_raise((e.text or "").strip())
            for e in alert_element.iter("cc")
        )
        return Alert(name=name, query=query, query_text=query_text, owners=owners, ccs=ccs)

    def find_user(self, identifier: str) -> User | None:
        for user in self.users:
            if user.matches(identifier):
                return user
        return None

    def find_user_or_raise(self, identifier: str) -> User:
        user = self.find_user(identifier)
        if user is None:
            raise ConfigError(f"Cannot find user: {identifier}")
        return user


def load_alerts(path: str | Path) -> list[Alert]:
    """Load alert definitions from an XML file."""
    return AlertsConfigLoader().load(path)
